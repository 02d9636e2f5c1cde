"""
Greedy longest-prefix-window matching.

Shared by the character segmenter, the English compound matcher, pinyin
syllable splitting and script conversion. The only thing that differs
between them is the unit (a character, a word), how a run of units is
joined into a key, and the membership test.

At every cursor position the window starts at ``min(len(units), window)``
units and shrinks one unit at a time until the joined run is a key. A
position where even a single unit is not a key is skipped and the unit is
dropped from the tokens; the dropped spans are still reported in
``MatchResult.skipped``.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple, TypeVar

U = TypeVar('U')


@dataclass(frozen=True)
class Match:
    """A matched run of units ``units[start:end]`` and the key it formed."""
    start: int
    end: int
    key: str


@dataclass
class MatchResult:
    matches: List[Match] = field(default_factory=list)
    # Half-open spans of dropped units, adjacent drops merged
    skipped: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def tokens(self) -> List[str]:
        return [m.key for m in self.matches]

    @property
    def complete(self) -> bool:
        """True when no unit was dropped."""
        return not self.skipped


def _add_skip(skipped: List[Tuple[int, int]], position: int):
    if skipped and skipped[-1][1] == position:
        skipped[-1] = (skipped[-1][0], position + 1)
    else:
        skipped.append((position, position + 1))


def longest_match(
    units: Sequence[U],
    contains: Callable[[str], bool],
    window: int,
    join: Callable[[Sequence[U]], str] = ''.join,
) -> MatchResult:
    """
    Split ``units`` into the longest keys accepted by ``contains``.

    Args:
        units: Characters or words to match over.
        contains: Membership test for a joined key.
        window: Upper bound on the number of units in one key.
        join: Turns a run of units into a key.

    Returns:
        MatchResult with matches in input order.
    """
    result = MatchResult()
    count = len(units)
    default_take = min(count, window)
    skip = 0
    take = default_take

    while skip < count:
        # A run never extends past the last unit
        take = min(take, count - skip)
        key = join(units[skip:skip + take])
        if contains(key):
            result.matches.append(Match(skip, skip + take, key))
            skip += take
            take = default_take
        elif take > 1:
            take -= 1
        else:
            _add_skip(result.skipped, skip)
            skip += 1
            take = default_take

    return result
