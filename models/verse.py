# models/verse.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from database import Base

class Verse(Base):
    """One verse of one translation.

    Within a translation, ``id`` increases in reading order (book_num, chapter,
    verse), so the rows between two ids are exactly the verses between two
    scripture locations.
    """
    __tablename__ = 'verses'
    __table_args__ = (
        Index('ix_verses_location', 'translation_id', 'book_id', 'chapter', 'verse'),
        Index('ix_verses_structure', 'translation_id', 'book_num', 'chapter'),
    )

    id = Column(Integer, primary_key=True)
    translation_id = Column(Integer, ForeignKey('translations.id', ondelete='CASCADE'), nullable=False)

    book_id = Column(String(3), nullable=False)  # USFM code, e.g. "JHN"
    book = Column(String(100), nullable=False)   # Book name in the translation's language
    book_num = Column(Integer, nullable=False)   # 1-based canonical position
    chapter = Column(Integer, nullable=False)
    verse = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)

    translation = relationship("Translation", back_populates="verses")

    def __repr__(self):
        return f'<Verse {self.id} {self.book_id} {self.chapter}:{self.verse}>'
