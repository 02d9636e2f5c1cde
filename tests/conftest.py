"""
Shared fixtures: a dictionary compiled once per session from the sample
CC-CEDICT file in tests/data.
"""

from pathlib import Path

import pytest

from hanzidict.detection import ClassificationResult
from hanzidict.dict_load import build_dictionary
from hanzidict.dictionary import ChineseDictionary
from hanzidict.store import load_store

DATA_DIR = Path(__file__).parent / "data"
CEDICT_SAMPLE = DATA_DIR / "cedict_sample.u8"
HSK_SAMPLE = DATA_DIR / "hsk_sample.tsv"


@pytest.fixture(scope="session")
def db_path(tmp_path_factory):
    """Path to a dictionary compiled from the sample source."""
    path = tmp_path_factory.mktemp("dict") / "hanzidict.db"
    build_dictionary(cedict_path=CEDICT_SAMPLE, db_path=path, hsk_path=HSK_SAMPLE)
    return path


@pytest.fixture(scope="session")
def store(db_path):
    return load_store(db_path)


@pytest.fixture(scope="session")
def dictionary(store):
    return ChineseDictionary(store)


class FixedClassifier:
    """Classifier stub that always answers the same."""

    def __init__(self, result: ClassificationResult):
        self.result = result
        self.calls = []

    def classify(self, text):
        self.calls.append(text)
        return self.result


class FixedConverter:
    """Converter stub with a fixed traditional/simplified answer."""

    def __init__(self, traditional: bool):
        self.traditional = traditional

    def is_traditional(self, text):
        return self.traditional

    def is_simplified(self, text):
        return not self.traditional

    def to_simplified(self, text):
        return text

    def to_traditional(self, text):
        return text


@pytest.fixture
def fixed_classifier():
    return FixedClassifier


@pytest.fixture
def fixed_converter():
    return FixedConverter
