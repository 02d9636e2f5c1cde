"""
Pydantic models for hanzidict query results.

Used for the CLI's JSON output and suitable as response schemas for a
web API.

Usage:
    from hanzidict.models import QueryResult

    entries = dictionary.query(text)
    result = QueryResult.from_query(text, dictionary.classify(text), entries)
    print(result.model_dump_json())
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class MeasureWordResult(BaseModel):
    """A measure word attached to an entry."""
    traditional: str = Field(..., description="Traditional spelling")
    simplified: str = Field(..., description="Simplified spelling")
    pinyin: str = Field(..., description="Pinyin with tone marks")
    pinyin_numbers: str = Field(..., description="Pinyin with tone digits")

    class Config:
        from_attributes = True


class EntryResult(BaseModel):
    """
    Pydantic model for a single dictionary entry.

    A flattened version of WordEntry designed for serialization.
    """
    traditional: str = Field(..., description="Traditional spelling")
    simplified: str = Field(..., description="Simplified spelling")
    pinyin: str = Field(..., description="Pinyin with tone marks (e.g. 'nǐ hǎo')")
    pinyin_numbers: str = Field(..., description="Pinyin with tone digits (e.g. 'ni3 hao3')")
    english: List[str] = Field(default_factory=list, description="English glosses")
    tones: List[int] = Field(default_factory=list, description="Tone per syllable, 5 for neutral")
    measure_words: List[MeasureWordResult] = Field(default_factory=list)
    hsk: int = Field(0, description="HSK level, 0 if not in the syllabus")
    word_id: int = Field(..., description="Dictionary word id")

    class Config:
        from_attributes = True

    @classmethod
    def from_entry(cls, entry: Any) -> "EntryResult":
        """Create EntryResult from a WordEntry."""
        return cls(
            traditional=entry.traditional,
            simplified=entry.simplified,
            pinyin=entry.pinyin_marks,
            pinyin_numbers=entry.pinyin_numbers,
            english=list(entry.english),
            tones=list(entry.tone_marks),
            measure_words=[
                MeasureWordResult(
                    traditional=mw.traditional,
                    simplified=mw.simplified,
                    pinyin=mw.pinyin_marks,
                    pinyin_numbers=mw.pinyin_numbers,
                )
                for mw in entry.measure_words
            ],
            hsk=entry.hsk,
            word_id=entry.word_id,
        )


class QueryResult(BaseModel):
    """Entries found for one query, with the classification that routed it."""
    query: str = Field(..., description="Query text as given")
    classification: str = Field(..., description="PY, EN, ZH or UN")
    entries: List[EntryResult] = Field(default_factory=list)
    count: int = Field(0, description="Number of entries")

    @classmethod
    def from_query(
        cls,
        query: str,
        classification: Any,
        entries: Optional[List[Any]],
    ) -> "QueryResult":
        """
        Create QueryResult from ChineseDictionary.query() output.

        Args:
            query: The query text.
            classification: A ClassificationResult or its string value.
            entries: WordEntry list, or None for an unclassified query.
        """
        results = [EntryResult.from_entry(e) for e in entries or []]
        label = classification.value if hasattr(classification, 'value') else str(classification)
        return cls(query=query, classification=label, entries=results, count=len(results))
