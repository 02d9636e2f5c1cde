"""
Default text classifier.

Decides whether a query is Chinese characters, pinyin or English:

1. Any Han character makes it Chinese.
2. If every whitespace separated token splits into pinyin syllables it
   is pinyin, unless it has no tone marks or digits and every token is
   also an English word: a common one ("man", "long", "she") or one the
   caller's ``english_words`` test accepts ("name", "banana").
3. Anything else containing Latin letters is English.
4. Everything else, including empty input, is undetermined.
"""

import logging
import re
from typing import Callable, Optional

from hanzidict.characters import contains_han
from hanzidict.detection import ClassificationResult
from hanzidict.pinyin import has_tone_marks, has_tone_numbers, is_pinyin_token, strip_tones

logger = logging.getLogger(__name__)

LATIN_RE = re.compile(r"[A-Za-z]")

# English words that are also valid toneless pinyin
COMMON_ENGLISH_WORDS = frozenset("""
a an ban bang can change chin china dan die fan gang hang he hen lie long
lung man me men pan pang pen pie ran sang she shun sun tan ten tie wan yen
yang you zen
""".split())


class PinyinClassifier:
    """
    Rule based classifier for Chinese, pinyin and English queries.

    Args:
        english_words: Optional membership test for lowercase English
            words, usually the English index of the dictionary.
    """

    def __init__(self, english_words: Optional[Callable[[str], bool]] = None):
        self.english_words = english_words

    def is_english_word(self, token: str) -> bool:
        word = token.lower()
        if word in COMMON_ENGLISH_WORDS:
            return True
        return self.english_words is not None and self.english_words(word)

    def classify(self, text: str) -> ClassificationResult:
        if contains_han(text):
            return ClassificationResult.ZH

        tokens = text.split()
        if not tokens:
            return ClassificationResult.UN

        if all(is_pinyin_token(t) for t in tokens):
            toned = has_tone_marks(text) or has_tone_numbers(text)
            if toned or not all(self.is_english_word(t) for t in tokens):
                return ClassificationResult.PY

        if LATIN_RE.search(strip_tones(text)):
            return ClassificationResult.EN

        logger.debug(f"Could not classify {text!r}")
        return ClassificationResult.UN
