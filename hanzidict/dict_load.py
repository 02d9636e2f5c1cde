"""
Dictionary compilation for hanzidict.

Reads CC-CEDICT (plain or gzipped) and an optional HSK list and writes
the entry tables and the four lexical indices into a SQLite file.
"""

import gzip
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from sqlalchemy import insert

from hanzidict.db.connection import create_schema, dispose_engine, get_engine
from hanzidict.db.models import Gloss, IndexRow, MeasureWordRow, Meta, Word
from hanzidict.loading.cedict import (
    CedictRecord, english_keys, iter_records, pinyin_keys,
)
from hanzidict.loading.hsk import load_hsk_levels
from hanzidict.settings import CEDICT_PATH, DB_PATH, FORMAT_VERSION
from hanzidict.store import IndexName

logger = logging.getLogger(__name__)


def _open_source(path: Path):
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")


class _IndexBuilder:
    """Collects key -> ids in insertion order, one id per key at most once."""

    def __init__(self):
        self.keys: Dict[IndexName, Dict[str, List[int]]] = {name: {} for name in IndexName}

    def add(self, name: IndexName, key: str, word_id: int):
        ids = self.keys[name].setdefault(key, [])
        if word_id not in ids:
            ids.append(word_id)

    def add_record(self, record: CedictRecord, word_id: int):
        self.add(IndexName.TRADITIONAL, record.traditional, word_id)
        self.add(IndexName.SIMPLIFIED, record.simplified, word_id)
        for key in pinyin_keys(record.pinyin_numbers):
            self.add(IndexName.PINYIN, key, word_id)
        for key in english_keys(record.english):
            self.add(IndexName.ENGLISH, key, word_id)

    def rows(self):
        for name, index in self.keys.items():
            for key, ids in index.items():
                for ord_, word_id in enumerate(ids):
                    yield {"index_name": name.value, "key": key, "ord": ord_, "word_id": word_id}


def build_dictionary(
    cedict_path: Union[str, Path, None] = None,
    db_path: Union[str, Path, None] = None,
    hsk_path: Union[str, Path, None] = None,
    batch_size: int = 5000,
    progress_callback: Optional[Callable[[int], None]] = None,
    strict: bool = False,
) -> int:
    """
    Compile a CC-CEDICT file into a dictionary database.

    An existing file at ``db_path`` is replaced only once the new
    dictionary is complete; a failed build leaves it untouched.

    Args:
        cedict_path: CC-CEDICT source (``.gz`` allowed).
        db_path: Output SQLite file.
        hsk_path: Optional HSK list.
        batch_size: Rows per INSERT batch.
        progress_callback: Called with the running entry count.
        strict: Raise on malformed source lines instead of skipping them.

    Returns:
        Number of entries written.
    """
    cedict_path = Path(cedict_path or CEDICT_PATH)
    db_path = Path(db_path or DB_PATH)

    # Also check for .gz version
    if not cedict_path.exists() and cedict_path.with_name(cedict_path.name + ".gz").exists():
        cedict_path = cedict_path.with_name(cedict_path.name + ".gz")

    if not cedict_path.exists():
        raise FileNotFoundError(f"CC-CEDICT not found at: {cedict_path}")

    hsk_levels = load_hsk_levels(hsk_path) if hsk_path else {}

    words, glosses, measure_words = [], [], []
    indices = _IndexBuilder()
    word_id = 0
    skipped = 0

    with _open_source(cedict_path) as handle:
        for line_no, record in iter_records(handle, strict=strict):
            if record is None:
                skipped += 1
                logger.warning(f"{cedict_path}:{line_no}: skipping malformed entry")
                continue
            word_id += 1
            words.append({
                "word_id": word_id,
                "traditional": record.traditional,
                "simplified": record.simplified,
                "pinyin_marks": record.pinyin_marks,
                "pinyin_numbers": record.pinyin_numbers,
                "tones": " ".join(str(t) for t in record.tone_marks),
                "hash": record.hash,
                "hsk": hsk_levels.get(record.simplified, 0),
            })
            for ord_, text in enumerate(record.english):
                glosses.append({"word_id": word_id, "ord": ord_, "text": text})
            for ord_, mw in enumerate(record.measure_words):
                measure_words.append({
                    "word_id": word_id,
                    "ord": ord_,
                    "traditional": mw.traditional,
                    "simplified": mw.simplified,
                    "pinyin_marks": mw.pinyin_marks,
                    "pinyin_numbers": mw.pinyin_numbers,
                })
            indices.add_record(record, word_id)

            if progress_callback:
                progress_callback(word_id)

    logger.info(f"Parsed {word_id} entries from {cedict_path} ({skipped} skipped)")

    # Built beside the target and moved into place only after commit
    db_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = db_path.with_name(db_path.name + ".tmp")
    dispose_engine(tmp_path)
    if tmp_path.exists():
        os.remove(tmp_path)

    try:
        engine = get_engine(tmp_path)
        create_schema(engine)
        with engine.begin() as conn:
            for model, rows in (
                (Word, words),
                (Gloss, glosses),
                (MeasureWordRow, measure_words),
                (IndexRow, list(indices.rows())),
            ):
                for i in range(0, len(rows), batch_size):
                    conn.execute(insert(model), rows[i:i + batch_size])
            conn.execute(insert(Meta), [
                {"key": "format_version", "value": str(FORMAT_VERSION)},
                {"key": "source", "value": cedict_path.name},
                {"key": "entry_count", "value": str(word_id)},
                {"key": "built_at", "value": datetime.now(timezone.utc).isoformat()},
            ])
        dispose_engine(tmp_path)
        dispose_engine(db_path)
        os.replace(tmp_path, db_path)
    finally:
        dispose_engine(tmp_path)
        if tmp_path.exists():
            os.remove(tmp_path)

    logger.info(f"Wrote dictionary with {word_id} entries to {db_path}")
    return word_id
