# utils/verse_lookup.py
"""Datastore queries behind reference lookups.

Every function takes an open SQLAlchemy session and only reads. Endpoints are
resolved to row ids first; verse rows are then fetched as id ranges, which
works because ids follow reading order within a translation.
"""
import logging
import random
from sqlalchemy import func

from models import Translation, Verse

logger = logging.getLogger(__name__)


class DataIntegrityError(Exception):
    """The verses table contradicts its own aggregates (e.g. a gap in book_num)."""


def find_translation(db, identifier):
    """Translation row whose identifier matches exactly, or None."""
    return db.query(Translation).filter(Translation.identifier == identifier).first()


def _endpoint_filter(query, endpoint, translation_id):
    query = query.filter(Verse.translation_id == translation_id, Verse.book_id == endpoint.book)
    if endpoint.chapter is not None:
        query = query.filter(Verse.chapter == endpoint.chapter)
    if endpoint.verse is not None:
        query = query.filter(Verse.verse == endpoint.verse)
    return query


def resolve_range_start(db, endpoint, translation_id):
    """Lowest row id matching the endpoint (first verse of the chapter or book when open)."""
    return _endpoint_filter(db.query(func.min(Verse.id)), endpoint, translation_id).scalar()


def resolve_range_end(db, endpoint, translation_id):
    """Highest row id matching the endpoint (last verse of the chapter or book when open)."""
    return _endpoint_filter(db.query(func.max(Verse.id)), endpoint, translation_id).scalar()


def aggregate_verses(db, ranges, translation_id):
    """Verse rows for every range, concatenated in the order the ranges were given.

    Returns None if any range fails to resolve; there are no partial results.
    Overlapping ranges repeat verses, and ranges are not re-sorted.
    """
    resolved = []
    for semantic_range in ranges:
        start_id = resolve_range_start(db, semantic_range.start, translation_id)
        end_id = resolve_range_end(db, semantic_range.end, translation_id)
        if start_id is None or end_id is None:
            logger.info(f"Range {semantic_range} not found in translation {translation_id}")
            return None
        resolved.append((start_id, end_id))

    verses = []
    for start_id, end_id in resolved:
        verses.extend(
            db.query(Verse)
            .filter(Verse.translation_id == translation_id, Verse.id.between(start_id, end_id))
            .order_by(Verse.id)
            .all()
        )
    return verses


def sample_random_reference(db, translation_id, rng=None):
    """Pick a random "<book> <chapter>:<verse>" for a translation.

    Each level is drawn uniformly over its own count (book, then chapter within
    that book, then verse within that chapter) using MAX aggregates, so long
    chapters are no more likely than short ones and no verse rows are loaded.
    """
    rng = rng or random
    in_translation = Verse.translation_id == translation_id

    max_book_num = db.query(func.max(Verse.book_num)).filter(in_translation).scalar()
    if not max_book_num:
        raise DataIntegrityError(f"Translation {translation_id} has no verses")
    book_num = rng.randint(1, max_book_num)

    book = (
        db.query(Verse.book)
        .filter(in_translation, Verse.book_num == book_num)
        .order_by(Verse.id)
        .limit(1)
        .scalar()
    )
    if book is None:
        raise DataIntegrityError(f"Translation {translation_id} has no book number {book_num}")

    max_chapter = (
        db.query(func.max(Verse.chapter))
        .filter(in_translation, Verse.book_num == book_num)
        .scalar()
    )
    chapter = rng.randint(1, max_chapter)

    max_verse = (
        db.query(func.max(Verse.verse))
        .filter(in_translation, Verse.book_num == book_num, Verse.chapter == chapter)
        .scalar()
    )
    if max_verse is None:
        raise DataIntegrityError(f"{book} {chapter} has no verses in translation {translation_id}")
    verse = rng.randint(1, max_verse)

    return f"{book} {chapter}:{verse}"


def list_translations(db):
    return db.query(Translation).order_by(Translation.language, Translation.name).all()


def book_names_for(db, book_id):
    """Map translation id -> that translation's name for ``book_id``."""
    rows = (
        db.query(Verse.translation_id, Verse.book)
        .filter(Verse.book_id == book_id)
        .group_by(Verse.translation_id, Verse.book)
        .all()
    )
    return {translation_id: book for translation_id, book in rows}
