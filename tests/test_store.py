"""
Tests for store.py, dict_load.py and cache.py - compiling, loading and
sharing the dictionary.
"""

import threading
import time
from unittest.mock import patch

import pytest
from sqlalchemy import update

from hanzidict.cache import Cache, defcache
from hanzidict.db.connection import dispose_engine, get_engine
from hanzidict.db.models import Meta
from hanzidict.dict_load import build_dictionary
from hanzidict.errors import (
    CedictFormatError, DictionaryLoadError, DictionaryNotFoundError,
    InconsistentDataError,
)
from hanzidict.store import IndexName, LexicalStore, WordEntry, load_store

from conftest import CEDICT_SAMPLE


def make_entry(word_id, simplified="好"):
    return WordEntry(
        traditional=simplified,
        simplified=simplified,
        pinyin_marks="hǎo",
        pinyin_numbers="hao3",
        english=("good",),
        tone_marks=(3,),
        hash=0,
        measure_words=(),
        hsk=0,
        word_id=word_id,
    )


class TestLexicalStore:

    def test_get_resolves_in_order(self):
        entries = {1: make_entry(1), 2: make_entry(2)}
        store = LexicalStore({IndexName.SIMPLIFIED: {"好": [2, 1]}}, entries)
        assert [e.word_id for e in store.get(IndexName.SIMPLIFIED, "好")] == [2, 1]

    def test_absent_key(self):
        store = LexicalStore({}, {1: make_entry(1)})
        assert store.get(IndexName.ENGLISH, "nothing") == []
        assert not store.contains(IndexName.ENGLISH, "nothing")

    def test_dangling_id_rejected(self):
        with pytest.raises(InconsistentDataError) as exc_info:
            LexicalStore({IndexName.PINYIN: {"hao3": [1, 99]}}, {1: make_entry(1)})
        assert exc_info.value.word_id == 99
        assert exc_info.value.index_name == "pinyin"

    def test_resolve_unknown(self):
        store = LexicalStore({}, {1: make_entry(1)})
        with pytest.raises(InconsistentDataError):
            store.resolve(5)

    def test_indices_read_only(self):
        store = LexicalStore({IndexName.SIMPLIFIED: {"好": [1]}}, {1: make_entry(1)})
        with pytest.raises(TypeError):
            store.index(IndexName.SIMPLIFIED)["好"] = (2,)

    def test_entries_sorted(self):
        store = LexicalStore({}, {3: make_entry(3), 1: make_entry(1)})
        assert [e.word_id for e in store.entries()] == [1, 3]


class TestLoadStore:

    def test_loaded_counts(self, store):
        assert len(store) == 54
        assert store.metadata["format_version"] == "1"
        assert store.metadata["entry_count"] == "54"

    def test_entry_fields(self, store):
        (entry,) = store.get(IndexName.TRADITIONAL, "電腦")
        assert entry.simplified == "电脑"
        assert entry.pinyin_marks == "diàn nǎo"
        assert entry.english == ("computer",)
        assert entry.measure_words[0].simplified == "台"
        assert entry.hsk == 1

    def test_homographs_in_source_order(self, store):
        entries = store.get(IndexName.SIMPLIFIED, "好")
        assert [e.pinyin_numbers for e in entries] == ["hao3", "hao4"]

    def test_every_indexed_id_resolves(self, store):
        for name in IndexName:
            for key, ids in store.index(name).items():
                for word_id in ids:
                    assert store.resolve(word_id).word_id == word_id

    def test_missing_file(self, tmp_path):
        with pytest.raises(DictionaryNotFoundError):
            load_store(tmp_path / "absent.db")

    def test_missing_file_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_store(tmp_path / "absent.db")

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"this is not sqlite" * 100)
        with pytest.raises(DictionaryLoadError):
            load_store(path)

    def test_version_mismatch(self, tmp_path):
        path = tmp_path / "old.db"
        build_dictionary(cedict_path=CEDICT_SAMPLE, db_path=path)
        with get_engine(path).begin() as conn:
            conn.execute(update(Meta).where(Meta.key == "format_version").values(value="0"))
        dispose_engine(path)
        with pytest.raises(DictionaryLoadError, match="format version"):
            load_store(path)


class TestBuildDictionary:

    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_dictionary(cedict_path=tmp_path / "none.u8", db_path=tmp_path / "out.db")

    def test_gzip_source(self, tmp_path):
        import gzip
        source = tmp_path / "cedict.u8.gz"
        with gzip.open(source, "wt", encoding="utf-8") as f:
            f.write("你好 你好 [ni3 hao3] /hello/\n")
        count = build_dictionary(cedict_path=source, db_path=tmp_path / "out.db")
        assert count == 1

    def test_rebuild_replaces(self, tmp_path):
        source = tmp_path / "cedict.u8"
        out = tmp_path / "out.db"
        source.write_text("你 你 [ni3] /you/\n", encoding="utf-8")
        build_dictionary(cedict_path=source, db_path=out)
        source.write_text("好 好 [hao3] /good/\n", encoding="utf-8")
        build_dictionary(cedict_path=source, db_path=out)
        store = load_store(out)
        assert len(store) == 1
        assert store.contains(IndexName.SIMPLIFIED, "好")
        assert not store.contains(IndexName.SIMPLIFIED, "你")

    def test_failed_rebuild_keeps_existing(self, tmp_path):
        out = tmp_path / "out.db"
        build_dictionary(cedict_path=CEDICT_SAMPLE, db_path=out)
        bad = tmp_path / "bad.u8"
        bad.write_text("好 好 [hao3] /good/\nbroken line\n", encoding="utf-8")

        with pytest.raises(CedictFormatError):
            build_dictionary(cedict_path=bad, db_path=out, strict=True)

        assert len(load_store(out)) == 54
        assert list(tmp_path.glob("*.tmp")) == []

    def test_no_partial_file_on_failure(self, tmp_path):
        out = tmp_path / "out.db"
        bad = tmp_path / "bad.u8"
        bad.write_text("broken line\n", encoding="utf-8")
        with pytest.raises(CedictFormatError):
            build_dictionary(cedict_path=bad, db_path=out, strict=True)
        assert not out.exists()

    def test_write_failure_keeps_existing(self, tmp_path):
        out = tmp_path / "out.db"
        build_dictionary(cedict_path=CEDICT_SAMPLE, db_path=out)
        with patch("hanzidict.dict_load.create_schema", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                build_dictionary(cedict_path=CEDICT_SAMPLE, db_path=out)
        assert len(load_store(out)) == 54
        assert list(tmp_path.glob("*.tmp")) == []

    def test_malformed_lines_skipped(self, tmp_path):
        source = tmp_path / "cedict.u8"
        source.write_text("你 你 [ni3] /you/\nbroken\n", encoding="utf-8")
        assert build_dictionary(cedict_path=source, db_path=tmp_path / "out.db") == 1

    def test_progress_callback(self, tmp_path):
        counts = []
        build_dictionary(
            cedict_path=CEDICT_SAMPLE, db_path=tmp_path / "out.db",
            progress_callback=counts.append,
        )
        assert counts[-1] == 54


class TestCache:

    def test_initializer_runs_once_under_contention(self):
        calls = []

        def slow_init():
            calls.append(1)
            time.sleep(0.05)
            return object()

        cache = Cache("test-contention", slow_init)
        results = []
        threads = [threading.Thread(target=lambda: results.append(cache.ensure())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len({id(r) for r in results}) == 1

    def test_failed_init_retried(self):
        attempts = []

        @defcache("test-retry")
        def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first call fails")
            return "ok"

        with pytest.raises(RuntimeError):
            flaky.ensure()
        assert not flaky.is_ready()
        assert flaky.ensure() == "ok"
        assert flaky.is_ready()
        assert repr(flaky) == "<Cache 'test-retry' ready>"

    def test_invalidate(self):
        values = iter([1, 2])
        cache = Cache("test-invalidate", lambda: next(values))
        assert cache.ensure() == 1
        cache.invalidate()
        assert cache.ensure() == 2
