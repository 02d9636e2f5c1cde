"""
Tests for segment.py and english.py - character segmentation and English
compound matching against the sample dictionary.
"""

import pytest

from hanzidict.english import english_tokens, match_english
from hanzidict.segment import match_characters, segment_text
from hanzidict.store import IndexName


@pytest.fixture(scope="module")
def traditional(store):
    return store.index(IndexName.TRADITIONAL).__contains__


@pytest.fixture(scope="module")
def simplified(store):
    return store.index(IndexName.SIMPLIFIED).__contains__


@pytest.fixture(scope="module")
def english(store):
    return store.index(IndexName.ENGLISH).__contains__


class TestSegmentText:

    def test_traditional_sentence(self, traditional):
        assert segment_text("今天的天氣挺爽", traditional) == ["今天", "的", "天氣", "挺", "爽"]

    def test_unknown_characters_dropped(self, simplified):
        assert segment_text("红色是我favorite颜色。", simplified) == ["红色", "是", "我", "颜色"]

    def test_longest_word_wins(self, simplified):
        assert segment_text("世界人", simplified) == ["世界", "人"]

    def test_compound_before_parts(self, simplified):
        assert segment_text("冰淇淋", simplified) == ["冰淇淋"]
        assert segment_text("冰水", simplified) == ["冰水"]

    @pytest.mark.parametrize("text", ["", " ", "abc"])
    def test_nothing_to_segment(self, simplified, text):
        assert segment_text(text, simplified) == []

    def test_window(self, simplified):
        assert segment_text("冰淇淋", simplified, window=2) == ["冰"]

    def test_tokens_are_keys(self, simplified, store):
        for token in segment_text("今天天气不错，我喜欢冰水", simplified):
            assert store.contains(IndexName.SIMPLIFIED, token)

    def test_skipped_spans(self, simplified):
        result = match_characters("我ab你", simplified)
        assert result.tokens == ["我", "你"]
        assert result.skipped == [(1, 3)]


class TestEnglish:

    def test_tokens(self):
        assert english_tokens("  Hot  Dog ") == ["hot", "dog"]

    def test_phrase_before_words(self, english):
        assert match_english("hot dog", english) == ["hot%20dog"]

    def test_repeated_phrase_once(self, english):
        assert match_english("hot dog hot dog", english) == ["hot%20dog"]

    def test_case_insensitive(self, english):
        assert match_english("Watermelon", english) == match_english("watermelon", english)

    def test_unknown_words_dropped(self, english):
        assert match_english("the dog and the watermelon", english) == ["dog", "watermelon"]

    def test_multi_word_gloss(self, english):
        assert match_english("to run", english) == ["to%20run"]

    def test_empty(self, english):
        assert match_english("", english) == []
        assert match_english("   ", english) == []
