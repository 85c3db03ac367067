# utils/engine.py
import logging
import random as random_module
from typing import Optional

from config import EngineConfig
from database import get_db_session
from utils.formatting import format_result
from utils.reference_parser import ReferenceParser
from utils.results import (
    Found,
    InvalidParameter,
    LookupOutcome,
    ReferenceNotFound,
    TranslationNotFound,
)
from utils.verse_lookup import aggregate_verses, find_translation, sample_random_reference

logger = logging.getLogger(__name__)

RANDOM_VERSE = 'verse'


class VerseEngine:
    """Turns a reference and a translation identifier into verse data.

    Pipeline: translation lookup -> parse -> aggregate -> format. A random
    request first samples a reference from the translation and then runs the
    same pipeline.
    """

    def __init__(self, config: Optional[EngineConfig] = None, parser=None, session_factory=None, rng=None):
        self.config = config or EngineConfig()
        self.parser = parser or ReferenceParser()
        self.session_factory = session_factory or get_db_session
        self.rng = rng or random_module.Random()

    def resolve(
        self,
        reference_text: Optional[str],
        translation_identifier: Optional[str] = None,
        verse_numbers: bool = False,
        random: Optional[str] = None,
    ) -> LookupOutcome:
        if random is not None and random != RANDOM_VERSE:
            return InvalidParameter()

        identifier = translation_identifier or self.config.default_translation
        with self.session_factory() as db:
            translation = find_translation(db, identifier)
            if translation is None:
                logger.info(f"Translation '{identifier}' not found")
                return TranslationNotFound()

            if random is not None:
                reference_text = sample_random_reference(db, translation.id, self.rng)
                logger.info(f"Random verse for {identifier}: {reference_text}")

            ranges = self.parser.parse(reference_text or '', translation.language_code)
            if not ranges:
                return ReferenceNotFound()

            verses = aggregate_verses(db, ranges, translation.id)
            if verses is None:
                return ReferenceNotFound()

            # Rows are only readable while the session is open
            return Found(format_result(
                verses,
                translation,
                self.parser.normalize(ranges, translation.language_code),
                verse_numbers,
            ))
