"""
Interfaces of the script classifier and converter.

The query dispatcher only depends on these protocols; the default
implementations live in classify.py and convert.py.
"""

from enum import Enum
from typing import Protocol


class ClassificationResult(str, Enum):
    """
    What kind of text a query is.

    - PY: pinyin
    - EN: English
    - ZH: Chinese characters
    - UN: could not be determined
    """
    PY = "PY"
    EN = "EN"
    ZH = "ZH"
    UN = "UN"


class Classifier(Protocol):
    def classify(self, text: str) -> ClassificationResult:
        ...


class ScriptConverter(Protocol):
    def is_traditional(self, text: str) -> bool:
        ...

    def is_simplified(self, text: str) -> bool:
        ...

    def to_simplified(self, text: str) -> str:
        ...

    def to_traditional(self, text: str) -> str:
        ...
