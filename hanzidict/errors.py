"""
Exceptions raised by hanzidict.

Absent keys, unmatched characters and unclassifiable input are ordinary
results, never exceptions.
"""


class DictionaryError(Exception):
    """Base class for dictionary failures."""


class DictionaryLoadError(DictionaryError):
    """The compiled dictionary is unreadable, malformed or of the wrong version."""


class DictionaryNotFoundError(DictionaryLoadError, FileNotFoundError):
    """The compiled dictionary file does not exist."""


class InconsistentDataError(DictionaryError):
    """An index refers to a word id missing from the entry store."""

    def __init__(self, word_id: int, index_name: str = None, key: str = None):
        self.word_id = word_id
        self.index_name = index_name
        self.key = key
        where = f" (index={index_name!r}, key={key!r})" if index_name else ""
        super().__init__(
            f"Word id {word_id} is not in the entry store{where}; "
            "the compiled dictionary is corrupt or from a mismatched build"
        )


class CedictFormatError(ValueError):
    """A CC-CEDICT source line could not be parsed."""

    def __init__(self, line: str, line_no: int = None):
        self.line = line
        self.line_no = line_no
        prefix = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{prefix}malformed CC-CEDICT entry: {line!r}")
