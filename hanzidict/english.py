"""
English compound matching.

Works like the character segmenter but over words: up to
ENGLISH_WINDOW words are joined with ``%20`` and tried as one key, so
"hot dog" is looked up as a phrase before "hot" and "dog" separately.
"""

from typing import Callable, List

from hanzidict.matcher import longest_match
from hanzidict.settings import ENGLISH_KEY_DELIMITER, ENGLISH_WINDOW


def english_tokens(text: str) -> List[str]:
    """Lowercase and split on whitespace."""
    return text.lower().split()


def join_words(words) -> str:
    return ENGLISH_KEY_DELIMITER.join(words)


def match_english(
    text: str,
    contains: Callable[[str], bool],
    window: int = ENGLISH_WINDOW,
) -> List[str]:
    """
    Find the English index keys in ``text``, longest phrases first.

    Each key is reported once, at its first occurrence. Words that are
    not keys on their own are dropped.

        >>> match_english("Hot dog hot dog", english_index.__contains__)
        ['hot%20dog']
    """
    words = english_tokens(text)
    if not words:
        return []

    result = longest_match(words, contains, window, join=join_words)
    keys = []
    seen = set()
    for key in result.tokens:
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys
