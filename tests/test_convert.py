"""
Tests for convert.py - traditional/simplified detection and conversion.
"""

import pytest

from hanzidict.convert import DictionaryConverter


@pytest.fixture(scope="module")
def converter(store):
    return DictionaryConverter(store)


class TestDetection:

    def test_traditional_text(self, converter):
        assert converter.is_traditional("簡體字")
        assert not converter.is_simplified("簡體字")

    def test_simplified_text(self, converter):
        assert converter.is_simplified("简体字")
        assert not converter.is_traditional("简体字")

    def test_shared_characters_are_both(self, converter):
        assert converter.is_traditional("世界人")
        assert converter.is_simplified("世界人")

    def test_non_chinese_is_both(self, converter):
        assert converter.is_traditional("abc")
        assert converter.is_simplified("abc")

    def test_tables(self, converter):
        assert "體" in converter.traditional_only
        assert "体" in converter.simplified_only
        assert converter.to_simplified_chars["電"] == "电"
        assert converter.to_traditional_chars["脑"] == "腦"


class TestConversion:

    def test_to_simplified(self, converter):
        assert converter.to_simplified("簡體字") == "简体字"

    def test_to_traditional(self, converter):
        assert converter.to_traditional("繁体字") == "繁體字"

    def test_word_context(self, converter):
        assert converter.to_traditional("干净") == "乾淨"
        assert converter.to_traditional("干") == "幹"

    def test_unknown_characters_kept(self, converter):
        assert converter.to_simplified("電腦很好!") == "电脑很好!"

    def test_character_fallback(self, converter):
        # 體 has no entry of its own
        assert converter.to_simplified("體") == "体"
        assert converter.to_traditional("体") == "體"

    def test_already_converted(self, converter):
        assert converter.to_simplified("电脑") == "电脑"

    def test_empty(self, converter):
        assert converter.to_simplified("") == ""
        assert converter.to_traditional("") == ""
