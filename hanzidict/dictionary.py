"""
Query dispatcher for hanzidict.

Routes a query to pinyin lookup, English compound matching or Chinese
segmentation depending on how the classifier reads it, and resolves the
matched keys to entries through the lexical store.
"""

import logging
import unicodedata
from pathlib import Path
from typing import List, Optional, Union

from hanzidict.cache import defcache
from hanzidict.classify import PinyinClassifier
from hanzidict.convert import DictionaryConverter
from hanzidict.detection import Classifier, ClassificationResult, ScriptConverter
from hanzidict.english import match_english
from hanzidict.segment import segment_text
from hanzidict.store import IndexName, LexicalStore, WordEntry, load_store

logger = logging.getLogger(__name__)


class ChineseDictionary:
    """
    Searchable Chinese/English dictionary.

    Queries may be traditional or simplified characters, pinyin (tone
    marks, tone digits or no tones, space separated words) or English.

    Example:
        >>> dictionary = ChineseDictionary.open()
        >>> dictionary.query("to run")[0].simplified
        '执行'
        >>> dictionary.segment("今天天气不错")
        ['今天', '天气', '不错']
    """

    def __init__(
        self,
        store: LexicalStore,
        classifier: Optional[Classifier] = None,
        converter: Optional[ScriptConverter] = None,
    ):
        self.store = store
        if classifier is None:
            classifier = PinyinClassifier(
                english_words=lambda word: store.contains(IndexName.ENGLISH, word)
            )
        self.classifier = classifier
        self.converter = converter if converter is not None else DictionaryConverter(store)

    @classmethod
    def open(cls, db_path: Union[str, Path, None] = None) -> "ChineseDictionary":
        """Load the compiled dictionary and build the default collaborators."""
        return cls(load_store(db_path))

    # ------------------------------------------------------------------
    # Collaborator passthroughs
    # ------------------------------------------------------------------

    def classify(self, raw: str) -> ClassificationResult:
        return self.classifier.classify(raw)

    def convert_to_simplified(self, raw: str) -> str:
        return self.converter.to_simplified(raw)

    def convert_to_traditional(self, raw: str) -> str:
        return self.converter.to_traditional(raw)

    def is_traditional(self, raw: str) -> bool:
        return self.converter.is_traditional(raw)

    def is_simplified(self, raw: str) -> bool:
        return self.converter.is_simplified(raw)

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    def _character_index(self, raw: str) -> IndexName:
        if self.converter.is_traditional(raw):
            return IndexName.TRADITIONAL
        return IndexName.SIMPLIFIED

    def _segment(self, raw: str, index: IndexName) -> List[str]:
        return segment_text(raw, lambda key: self.store.contains(index, key))

    def segment(self, raw: str) -> List[str]:
        """
        Segment traditional or simplified text into dictionary words.

        Uses a longest-first dictionary driven approach; characters with
        no entry are left out.
        """
        return self._segment(raw, self._character_index(raw))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_by_pinyin(self, raw: str) -> List[WordEntry]:
        """
        Query with pinyin, one dictionary word per space separated token.

        Tone marks, tone digits and toneless pinyin are all indexed;
        diacritics match whether typed composed or decomposed.
        """
        entries: List[WordEntry] = []
        for word in raw.split(" "):
            if not word:
                continue
            key = unicodedata.normalize("NFC", word.lower())
            entries.extend(self.store.get(IndexName.PINYIN, key))
        return entries

    query_by_romanized = query_by_pinyin

    def query_by_english(self, raw: str) -> List[WordEntry]:
        """
        Query with English.

        Phrases of up to four words are matched before shorter ones; a
        phrase repeated in the query contributes its entries once.
        """
        entries: List[WordEntry] = []
        keys = match_english(raw, lambda key: self.store.contains(IndexName.ENGLISH, key))
        for key in keys:
            entries.extend(self.store.get(IndexName.ENGLISH, key))
        return entries

    def query_by_chinese(self, raw: str) -> List[WordEntry]:
        """Query with traditional or simplified characters."""
        index = self._character_index(raw)
        entries: List[WordEntry] = []
        for token in self._segment(raw, index):
            entries.extend(self.store.get(index, token))
        return entries

    def query_by_traditional(self, key: str) -> List[WordEntry]:
        """Entries whose traditional spelling is exactly ``key``."""
        return self.store.get(IndexName.TRADITIONAL, key)

    def query_by_simplified(self, key: str) -> List[WordEntry]:
        """Entries whose simplified spelling is exactly ``key``."""
        return self.store.get(IndexName.SIMPLIFIED, key)

    def query(self, raw: str) -> Optional[List[WordEntry]]:
        """
        Query with characters, pinyin or English.

        Returns:
            Matching entries in input order, or None if the query could
            not be classified.
        """
        classification = self.classifier.classify(raw)
        logger.debug(f"Query {raw!r} classified as {classification.value}")

        if classification == ClassificationResult.PY:
            return self.query_by_pinyin(raw)
        if classification == ClassificationResult.EN:
            return self.query_by_english(raw)
        if classification == ClassificationResult.ZH:
            return self.query_by_chinese(raw)
        return None


@defcache("dictionary")
def _default_dictionary() -> ChineseDictionary:
    return ChineseDictionary.open()


def get_dictionary() -> ChineseDictionary:
    """
    Get the process-wide dictionary, loading it on first use.

    Safe to call from several threads; the dictionary is loaded once.
    """
    return _default_dictionary.ensure()
