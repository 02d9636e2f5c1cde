"""
Lexical index store.

Holds the four key -> word id indices and the word id -> entry store,
read once from the compiled dictionary and never mutated afterwards.
Every lookup resolves through the entry store.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from hanzidict.db.connection import dispose_engine, get_session
from hanzidict.db.models import IndexRow, Meta, Word
from hanzidict.errors import (
    DictionaryLoadError, DictionaryNotFoundError, InconsistentDataError,
)
from hanzidict.settings import DB_PATH, FORMAT_VERSION

logger = logging.getLogger(__name__)


class IndexName(str, Enum):
    TRADITIONAL = "traditional"
    SIMPLIFIED = "simplified"
    PINYIN = "pinyin"
    ENGLISH = "english"


@dataclass(frozen=True)
class MeasureWord:
    traditional: str
    simplified: str
    pinyin_marks: str
    pinyin_numbers: str


@dataclass(frozen=True)
class WordEntry:
    """
    A dictionary entry.

    Attributes:
        traditional: Traditional spelling.
        simplified: Simplified spelling.
        pinyin_marks: Pinyin with tone diacritics ("nǐ hǎo").
        pinyin_numbers: Pinyin with tone digits ("ni3 hao3").
        english: English glosses in source order.
        tone_marks: Tone per syllable, 5 for neutral.
        hash: Hash of the source line.
        measure_words: Measure words used with this word.
        hsk: HSK level, 0 if not part of the syllabus.
        word_id: Unique identifier.
    """
    traditional: str
    simplified: str
    pinyin_marks: str
    pinyin_numbers: str
    english: Tuple[str, ...]
    tone_marks: Tuple[int, ...]
    hash: int
    measure_words: Tuple[MeasureWord, ...]
    hsk: int
    word_id: int


IndexMap = Mapping[str, Tuple[int, ...]]


class LexicalStore:
    """
    Read-only view over the indices and entries.

    Construction checks that every id referenced by an index exists in
    the entry store and raises InconsistentDataError otherwise.
    """

    def __init__(
        self,
        indices: Mapping[IndexName, Mapping[str, Tuple[int, ...]]],
        entries: Mapping[int, WordEntry],
        metadata: Optional[Mapping[str, str]] = None,
    ):
        self._entries = MappingProxyType(dict(entries))
        self._indices: Dict[IndexName, IndexMap] = {}
        for name in IndexName:
            index = indices.get(name, {})
            for key, ids in index.items():
                for word_id in ids:
                    if word_id not in self._entries:
                        raise InconsistentDataError(word_id, name.value, key)
            self._indices[name] = MappingProxyType(
                {key: tuple(ids) for key, ids in index.items()}
            )
        self.metadata = MappingProxyType(dict(metadata or {}))

    def __len__(self) -> int:
        return len(self._entries)

    def index(self, name: IndexName) -> IndexMap:
        return self._indices[name]

    def contains(self, name: IndexName, key: str) -> bool:
        return key in self._indices[name]

    def ids(self, name: IndexName, key: str) -> Tuple[int, ...]:
        """Word ids stored under a key, in build order; empty if absent."""
        return self._indices[name].get(key, ())

    def resolve(self, word_id: int) -> WordEntry:
        """
        Get the entry for a word id.

        Raises:
            InconsistentDataError: If the id is unknown.
        """
        try:
            return self._entries[word_id]
        except KeyError:
            raise InconsistentDataError(word_id) from None

    def get(self, name: IndexName, key: str) -> List[WordEntry]:
        """Entries stored under a key, in build order; empty if absent."""
        return [self.resolve(word_id) for word_id in self.ids(name, key)]

    def entries(self) -> Iterator[WordEntry]:
        """All entries in word id order."""
        for word_id in sorted(self._entries):
            yield self._entries[word_id]


# ============================================================================
# Loading
# ============================================================================

def _entry_from_row(row: Word) -> WordEntry:
    return WordEntry(
        traditional=row.traditional,
        simplified=row.simplified,
        pinyin_marks=row.pinyin_marks,
        pinyin_numbers=row.pinyin_numbers,
        english=tuple(g.text for g in row.glosses),
        tone_marks=tuple(int(t) for t in row.tones.split()),
        hash=row.hash,
        measure_words=tuple(
            MeasureWord(
                traditional=m.traditional,
                simplified=m.simplified,
                pinyin_marks=m.pinyin_marks,
                pinyin_numbers=m.pinyin_numbers,
            )
            for m in row.measure_words
        ),
        hsk=row.hsk,
        word_id=row.word_id,
    )


def _check_version(metadata: Mapping[str, str], db_path: Path):
    version = metadata.get("format_version")
    if version is None:
        raise DictionaryLoadError(f"{db_path} has no format version; not a hanzidict dictionary")
    if version != str(FORMAT_VERSION):
        raise DictionaryLoadError(
            f"{db_path} has format version {version}, expected {FORMAT_VERSION}; "
            "rebuild it with 'hanzidict build'"
        )


def load_store(db_path: Union[str, Path, None] = None) -> LexicalStore:
    """
    Load the compiled dictionary into memory.

    Args:
        db_path: Path to the compiled dictionary. Defaults to settings.DB_PATH.

    Raises:
        DictionaryNotFoundError: If the file does not exist.
        DictionaryLoadError: If the file is unreadable or of another version.
        InconsistentDataError: If an index refers to a missing entry.
    """
    db_path = Path(db_path) if db_path is not None else DB_PATH
    if not db_path.exists():
        raise DictionaryNotFoundError(
            f"Dictionary not found at {db_path}. "
            "Run 'hanzidict build --cedict PATH' to compile it."
        )

    t0 = time.perf_counter()
    session = get_session(db_path)
    try:
        metadata = {
            row.key: row.value
            for row in session.execute(select(Meta)).scalars()
        }
        _check_version(metadata, db_path)

        rows = session.execute(
            select(Word).options(
                selectinload(Word.glosses), selectinload(Word.measure_words)
            )
        ).scalars()
        entries = {row.word_id: _entry_from_row(row) for row in rows}

        indices: Dict[IndexName, Dict[str, List[int]]] = {name: {} for name in IndexName}
        index_rows = session.execute(
            select(IndexRow.index_name, IndexRow.key, IndexRow.word_id)
            .order_by(IndexRow.index_name, IndexRow.key, IndexRow.ord)
        )
        for index_name, key, word_id in index_rows:
            try:
                name = IndexName(index_name)
            except ValueError:
                raise DictionaryLoadError(f"Unknown index {index_name!r} in {db_path}") from None
            indices[name].setdefault(key, []).append(word_id)
    except SQLAlchemyError as e:
        raise DictionaryLoadError(f"Could not read dictionary {db_path}: {e}") from e
    except ValueError as e:
        raise DictionaryLoadError(f"Malformed entry data in {db_path}: {e}") from e
    finally:
        session.close()
        dispose_engine(db_path)

    store = LexicalStore(indices, entries, metadata)
    elapsed = (time.perf_counter() - t0) * 1000
    logger.info(
        f"Loaded {len(store)} entries and "
        f"{sum(len(store.index(n)) for n in IndexName)} keys from {db_path} in {elapsed:.1f}ms"
    )
    return store
