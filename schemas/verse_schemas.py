from pydantic import BaseModel, Field
from typing import List, Optional

class VerseRecord(BaseModel):
    """Public projection of a verses row."""
    book_id: str
    book_name: str
    chapter: int
    verse: int
    text: str

    @classmethod
    def from_row(cls, verse):
        return cls(
            book_id=verse.book_id,
            book_name=verse.book,
            chapter=verse.chapter,
            verse=verse.verse,
            text=verse.text,
        )

class VerseResult(BaseModel):
    # Field order is the order keys appear in the JSON response
    reference: str
    verses: List[VerseRecord]
    text: str
    translation_id: str
    translation_name: str
    translation_note: Optional[str] = None

class TranslationCreate(BaseModel):
    identifier: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., max_length=255)
    language: str = Field('English', max_length=100)
    language_code: str = Field('eng', max_length=10)
    license: Optional[str] = None
