"""
Tests for pinyin.py - tone handling and syllable splitting.
"""

import pytest

from hanzidict.pinyin import (
    has_tone_marks, has_tone_numbers, is_pinyin_token, normalize_cedict,
    numbers_to_marks, remove_tone_numbers, split_syllables, strip_tones,
    syllable_to_marks, tone_numbers,
)


class TestStripTones:

    @pytest.mark.parametrize("text,expected", [
        ("nǐhǎo", "nihao"),
        ("Zhōngguó", "Zhongguo"),
        ("lǜ", "lv"),
        ("nü", "nv"),
        ("plain", "plain"),
    ])
    def test_strip(self, text, expected):
        assert strip_tones(text) == expected


class TestToneDetection:

    def test_tone_marks(self):
        assert has_tone_marks("nǐhǎo")
        assert not has_tone_marks("nihao")
        assert not has_tone_marks("ni3hao3")

    def test_tone_marks_ignore_umlaut(self):
        assert not has_tone_marks("nü")

    def test_tone_numbers(self):
        assert has_tone_numbers("ni3hao3")
        assert not has_tone_numbers("nihao")


class TestSplitSyllables:

    @pytest.mark.parametrize("text,expected", [
        ("nihao", ["ni", "hao"]),
        ("ni3hao3", ["ni3", "hao3"]),
        ("nǐhǎo", ["ni", "hao"]),
        ("zhongguo", ["zhong", "guo"]),
        ("xian", ["xian"]),
        ("Beijing", ["bei", "jing"]),
        ("lvse", ["lv", "se"]),
    ])
    def test_split(self, text, expected):
        assert split_syllables(text) == expected

    @pytest.mark.parametrize("text", ["watermelon", "hello", "xyz", "", "run!"])
    def test_not_pinyin(self, text):
        assert split_syllables(text) is None

    def test_is_pinyin_token(self):
        assert is_pinyin_token("xihuan")
        assert not is_pinyin_token("to")


class TestToneConversion:

    def test_normalize_cedict(self):
        assert normalize_cedict("nu:3") == "nv3"
        assert normalize_cedict("U:") == "V"

    def test_tone_numbers(self):
        assert tone_numbers("ni3 hao3") == (3, 3)
        assert tone_numbers("xi3 huan5") == (3, 5)
        assert tone_numbers("de") == (5,)

    @pytest.mark.parametrize("syllable,expected", [
        ("hao3", "hǎo"),
        ("ma1", "mā"),
        ("guo2", "guó"),
        ("lv4", "lǜ"),
        ("nu:3", "nǚ"),
        ("de5", "de"),
        ("Zhong1", "Zhōng"),
    ])
    def test_syllable_to_marks(self, syllable, expected):
        assert syllable_to_marks(syllable) == expected

    def test_non_syllable_unchanged(self):
        assert syllable_to_marks(",") == ","
        assert syllable_to_marks("A") == "A"

    def test_numbers_to_marks(self):
        assert numbers_to_marks("ni3 hao3") == "nǐ hǎo"

    def test_remove_tone_numbers(self):
        assert remove_tone_numbers("hao3") == "hao"
        assert remove_tone_numbers("de") == "de"
