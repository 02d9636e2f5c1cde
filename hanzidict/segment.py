"""
Dictionary-driven segmentation of Chinese text.

Forward maximum matching: at each position the longest run of up to
SEGMENT_WINDOW characters that is a dictionary key becomes a token.
Characters with no entry of their own (punctuation, Latin letters) are
dropped.
"""

from typing import Callable, List

from hanzidict.matcher import MatchResult, longest_match
from hanzidict.settings import SEGMENT_WINDOW


def match_characters(
    text: str,
    contains: Callable[[str], bool],
    window: int = SEGMENT_WINDOW,
) -> MatchResult:
    """Run the longest-match over the characters of ``text``."""
    return longest_match(text, contains, window)


def segment_text(
    text: str,
    contains: Callable[[str], bool],
    window: int = SEGMENT_WINDOW,
) -> List[str]:
    """
    Split ``text`` into dictionary words.

    Args:
        text: Traditional or simplified Chinese text.
        contains: Membership test of the index to segment against.
        window: Longest word tried, in characters.

    Returns:
        Tokens in input order.

    Example:
        >>> segment_text("今天天气不错", simplified_index.__contains__)
        ['今天', '天气', '不错']
    """
    return match_characters(text, contains, window).tokens
