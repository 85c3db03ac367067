# models/translation.py
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from database import Base

class Translation(Base):
    __tablename__ = 'translations'

    id = Column(Integer, primary_key=True, index=True)
    identifier = Column(String(20), nullable=False, unique=True, index=True) # E.g., "WEB", "kjv" (case-sensitive)
    name = Column(String(255), nullable=False)
    language = Column(String(100), nullable=False)   # Display name, e.g. "English"
    language_code = Column(String(10), nullable=False) # ISO 639-3, e.g. "eng"
    license = Column(Text, nullable=True)

    verses = relationship("Verse", back_populates="translation", passive_deletes=True)

    def __repr__(self):
        return f'<Translation {self.identifier} ({self.language_code}) {self.name}>'
