"""
Traditional/simplified detection and conversion from dictionary data.

Character tables are derived from the spelling pairs of every entry: a
character is traditional-only if it stands in for a different simplified
character somewhere and never appears in a simplified spelling, and vice
versa. Conversion is word based so that one-to-many characters (干 ->
乾/幹/干) follow the word they are part of.
"""

import logging
from typing import Dict, Set

from hanzidict.characters import is_han
from hanzidict.segment import match_characters
from hanzidict.store import IndexName, LexicalStore

logger = logging.getLogger(__name__)


class DictionaryConverter:
    """Script detection and conversion backed by a LexicalStore."""

    def __init__(self, store: LexicalStore):
        self.store = store
        self.to_simplified_chars: Dict[str, str] = {}
        self.to_traditional_chars: Dict[str, str] = {}
        self.traditional_only: Set[str] = set()
        self.simplified_only: Set[str] = set()
        self._build_tables()

    def _build_tables(self):
        traditional_chars: Set[str] = set()
        simplified_chars: Set[str] = set()
        differing_traditional: Set[str] = set()
        differing_simplified: Set[str] = set()

        for entry in self.store.entries():
            traditional_chars.update(entry.traditional)
            simplified_chars.update(entry.simplified)
            if len(entry.traditional) != len(entry.simplified):
                continue
            for trad, simp in zip(entry.traditional, entry.simplified):
                if trad == simp or not (is_han(trad) and is_han(simp)):
                    continue
                differing_traditional.add(trad)
                differing_simplified.add(simp)
                self.to_simplified_chars.setdefault(trad, simp)
                self.to_traditional_chars.setdefault(simp, trad)

        self.traditional_only = differing_traditional - simplified_chars
        self.simplified_only = differing_simplified - traditional_chars
        logger.debug(
            f"Script tables: {len(self.traditional_only)} traditional-only, "
            f"{len(self.simplified_only)} simplified-only characters"
        )

    def is_traditional(self, text: str) -> bool:
        """True if no character in the text is simplified-only."""
        return not any(c in self.simplified_only for c in text)

    def is_simplified(self, text: str) -> bool:
        """True if no character in the text is traditional-only."""
        return not any(c in self.traditional_only for c in text)

    def _convert(
        self,
        text: str,
        source: IndexName,
        target_attr: str,
        source_attr: str,
        char_table: Dict[str, str],
    ) -> str:
        result = match_characters(text, lambda key: self.store.contains(source, key))
        pieces = []
        position = 0
        spans = [(m.start, m.end, m.key) for m in result.matches]
        spans += [(start, end, None) for start, end in result.skipped]
        for start, end, key in sorted(spans):
            if key is None:
                pieces.append("".join(char_table.get(c, c) for c in text[start:end]))
            else:
                pieces.append(self._convert_word(source, key, target_attr, source_attr, char_table))
            position = end
        pieces.append(text[position:])
        return "".join(pieces)

    def _convert_word(self, source, key, target_attr, source_attr, char_table) -> str:
        for entry in self.store.get(source, key):
            if getattr(entry, source_attr) == key:
                return getattr(entry, target_attr)
        return "".join(char_table.get(c, c) for c in key)

    def to_simplified(self, text: str) -> str:
        """Convert traditional text to simplified."""
        return self._convert(
            text, IndexName.TRADITIONAL, "simplified", "traditional", self.to_simplified_chars
        )

    def to_traditional(self, text: str) -> str:
        """Convert simplified text to traditional."""
        return self._convert(
            text, IndexName.SIMPLIFIED, "traditional", "simplified", self.to_traditional_chars
        )
