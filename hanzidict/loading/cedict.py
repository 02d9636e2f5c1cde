"""
CC-CEDICT parsing.

Line format (https://cc-cedict.org/wiki/format:syntax):

    TRADITIONAL SIMPLIFIED [pin1 yin1] /gloss 1/gloss 2/.../

Glosses starting with ``CL:`` list measure words
(``CL:條|条[tiao2],個|个[ge4]``) and are kept apart from the English.
"""

import hashlib
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, TextIO, Tuple

from hanzidict.characters import contains_han
from hanzidict.errors import CedictFormatError
from hanzidict.pinyin import (
    normalize_cedict, numbers_to_marks, remove_tone_numbers, syllable_to_marks,
    tone_numbers,
)
from hanzidict.settings import ENGLISH_KEY_DELIMITER

ENTRY_RE = re.compile(r"^(\S+)\s+(\S+)\s+\[([^\]]*)\]\s+/(.*)/\s*$")

# 條|条[tiao2] or 位[wei4]
MEASURE_WORD_RE = re.compile(r"^([^|\[\]]+)(?:\|([^\[\]]+))?\[([^\]]+)\]$")

MEASURE_WORD_PREFIX = "CL:"

PARENTHESES_RE = re.compile(r"\([^()]*\)")


@dataclass
class MeasureWordRecord:
    traditional: str
    simplified: str
    pinyin_marks: str
    pinyin_numbers: str


@dataclass
class CedictRecord:
    """One parsed CC-CEDICT line."""
    traditional: str
    simplified: str
    pinyin_numbers: str
    pinyin_marks: str
    english: List[str] = field(default_factory=list)
    tone_marks: Tuple[int, ...] = ()
    measure_words: List[MeasureWordRecord] = field(default_factory=list)
    hash: int = 0


def content_hash(line: str) -> int:
    """63-bit hash of a source line (fits a signed SQLite INTEGER)."""
    digest = hashlib.blake2b(line.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big") >> 1


def parse_measure_words(gloss: str) -> List[MeasureWordRecord]:
    """Parse the body of a ``CL:`` gloss."""
    body = gloss[len(MEASURE_WORD_PREFIX):]
    records = []
    for item in body.split(","):
        item = item.strip()
        match = MEASURE_WORD_RE.match(item)
        if not match:
            continue
        traditional, simplified, pinyin = match.groups()
        pinyin = normalize_cedict(pinyin)
        records.append(MeasureWordRecord(
            traditional=traditional,
            simplified=simplified or traditional,
            pinyin_marks=numbers_to_marks(pinyin),
            pinyin_numbers=pinyin,
        ))
    return records


def parse_line(line: str, line_no: Optional[int] = None) -> Optional[CedictRecord]:
    """
    Parse one line of CC-CEDICT.

    Returns:
        The record, or None for comments and blank lines.

    Raises:
        CedictFormatError: If the line is not a valid entry.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    match = ENTRY_RE.match(stripped)
    if not match:
        raise CedictFormatError(stripped, line_no)

    traditional, simplified, pinyin, glosses_raw = match.groups()
    pinyin = " ".join(normalize_cedict(s) for s in pinyin.split())

    english = []
    measure_words = []
    for gloss in glosses_raw.split("/"):
        gloss = gloss.strip()
        if not gloss:
            continue
        if gloss.startswith(MEASURE_WORD_PREFIX):
            measure_words.extend(parse_measure_words(gloss))
        else:
            english.append(gloss)

    return CedictRecord(
        traditional=traditional,
        simplified=simplified,
        pinyin_numbers=pinyin,
        pinyin_marks=numbers_to_marks(pinyin),
        english=english,
        tone_marks=tone_numbers(pinyin),
        measure_words=measure_words,
        hash=content_hash(stripped),
    )


def iter_records(
    handle: TextIO, strict: bool = False
) -> Iterator[Tuple[int, Optional[CedictRecord]]]:
    """
    Yield (line_no, record) for every entry in a CC-CEDICT stream.

    A malformed line raises when ``strict`` is set and is otherwise
    yielded with a None record so the caller can report it.
    """
    for line_no, line in enumerate(handle, start=1):
        try:
            record = parse_line(line, line_no)
        except CedictFormatError:
            if strict:
                raise
            yield line_no, None
            continue
        if record is not None:
            yield line_no, record


# ============================================================================
# Index Keys
# ============================================================================

def pinyin_keys(pinyin_numbers: str) -> List[str]:
    """
    Pinyin index keys for an entry, syllables joined without spaces.

    Numbered, diacritic and toneless forms, plus the numbered and
    toneless forms with ü where the entry has one. Keys are NFC.

        >>> pinyin_keys("ni3 hao3")
        ['ni3hao3', 'nǐhǎo', 'nihao']
    """
    syllables = [s.lower() for s in pinyin_numbers.split()]
    numbered = "".join(syllables)
    toneless = "".join(remove_tone_numbers(s) for s in syllables)
    candidates = [
        numbered,
        "".join(syllable_to_marks(s) for s in syllables),
        toneless,
        numbered.replace("v", "ü"),
        toneless.replace("v", "ü"),
    ]
    keys = []
    seen: Set[str] = set()
    for key in candidates:
        key = unicodedata.normalize("NFC", key)
        if key and key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def english_key(phrase: str) -> Optional[str]:
    """Normalize an English phrase into an index key, or None."""
    phrase = PARENTHESES_RE.sub(" ", phrase).lower()
    words = phrase.split()
    if not words:
        return None
    return ENGLISH_KEY_DELIMITER.join(words)


def english_keys(glosses: List[str]) -> List[str]:
    """
    English index keys for an entry's glosses.

    Each gloss and each of its ``;`` separated parts is a key; glosses
    containing Chinese characters are not indexed.
    """
    keys = []
    seen: Set[str] = set()
    for gloss in glosses:
        if contains_han(gloss):
            continue
        phrases = [gloss] + [p for p in gloss.split(";") if ";" in gloss]
        for phrase in phrases:
            key = english_key(phrase)
            if key and key not in seen:
                seen.add(key)
                keys.append(key)
    return keys
