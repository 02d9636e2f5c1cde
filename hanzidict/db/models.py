"""
SQLAlchemy models for the compiled dictionary.

One row per (index, key, position) in ``lexical_index`` keeps the
build-time order of word ids under each key.
"""

from typing import List

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Meta(Base):
    """Build metadata (format_version, source, entry_count, built_at)."""
    __tablename__ = "meta"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class Word(Base):
    __tablename__ = "word"

    word_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    traditional: Mapped[str] = mapped_column(String, nullable=False)
    simplified: Mapped[str] = mapped_column(String, nullable=False)
    pinyin_marks: Mapped[str] = mapped_column(String, nullable=False)
    pinyin_numbers: Mapped[str] = mapped_column(String, nullable=False)
    # Space separated tone digits, 5 = neutral
    tones: Mapped[str] = mapped_column(String, nullable=False, default="")
    hash: Mapped[int] = mapped_column(Integer, nullable=False)
    hsk: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    glosses: Mapped[List["Gloss"]] = relationship(
        back_populates="word", order_by="Gloss.ord"
    )
    measure_words: Mapped[List["MeasureWordRow"]] = relationship(
        back_populates="word", order_by="MeasureWordRow.ord"
    )


class Gloss(Base):
    __tablename__ = "gloss"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word_id: Mapped[int] = mapped_column(ForeignKey("word.word_id"), nullable=False, index=True)
    ord: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    word: Mapped[Word] = relationship(back_populates="glosses")


class MeasureWordRow(Base):
    __tablename__ = "measure_word"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word_id: Mapped[int] = mapped_column(ForeignKey("word.word_id"), nullable=False, index=True)
    ord: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    traditional: Mapped[str] = mapped_column(String, nullable=False)
    simplified: Mapped[str] = mapped_column(String, nullable=False)
    pinyin_marks: Mapped[str] = mapped_column(String, nullable=False)
    pinyin_numbers: Mapped[str] = mapped_column(String, nullable=False)

    word: Mapped[Word] = relationship(back_populates="measure_words")


class IndexRow(Base):
    __tablename__ = "lexical_index"
    __table_args__ = (
        Index("idx_lexical_index_lookup", "index_name", "key", "ord"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    index_name: Mapped[str] = mapped_column(String, nullable=False)
    key: Mapped[str] = mapped_column(String, nullable=False)
    ord: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Checked against word.word_id when the store is loaded
    word_id: Mapped[int] = mapped_column(Integer, nullable=False)
