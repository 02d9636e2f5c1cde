"""
Character classification for hanzidict.
"""

import re

# CJK Unified Ideographs, Extension A, Compatibility Ideographs, Extensions B-F
HAN_RE = re.compile("[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0002fa1f]")


def is_han(char: str) -> bool:
    """True if a single character is a Chinese ideograph."""
    return bool(HAN_RE.fullmatch(char))


def contains_han(text: str) -> bool:
    return HAN_RE.search(text) is not None
