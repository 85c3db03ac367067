# scripts/import_translation.py
import argparse
import json
import logging
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

from pydantic import ValidationError

from database import Base, get_engine, SessionLocal
from models import Translation, Verse
from schemas.verse_schemas import TranslationCreate
from utils.books import book_id_for_name, book_num_for, language_key

logger = logging.getLogger(__name__)

BATCH_SIZE = 1000


def parse_reference(ref):
    """Parse a reference like 'Genesis 1:1' into (book_name, chapter, verse)"""
    book_chapter, verse = ref.rsplit(':', 1)
    book_parts = book_chapter.rsplit(' ', 1)
    chapter = book_parts[-1]
    book_name = ' '.join(book_parts[:-1])
    return book_name, int(chapter), int(verse)


def clean_verse_text(text):
    """Clean verse text by removing any leading '#' and trimming whitespace"""
    return text.lstrip('#').strip()


def collect_verses(verses_data, language_code='eng'):
    """Turn {"Book C:V": text} into verse dicts sorted in reading order.

    Book names are read with the name table for ``language_code`` (English
    names are always accepted). Returns (verses, skipped_refs).
    """
    rows = []
    skipped = []
    for ref, text in verses_data.items():
        try:
            book_name, chapter, verse = parse_reference(ref)
        except ValueError:
            skipped.append(ref)
            logger.warning(f"Malformed reference '{ref}'")
            continue
        book_id = book_id_for_name(book_name, language_code)
        if book_id is None:
            skipped.append(ref)
            logger.warning(f"Unknown book '{book_name}' in reference '{ref}'")
            continue
        rows.append({
            'book_id': book_id,
            'book': book_name,
            'book_num': book_num_for(book_id),
            'chapter': chapter,
            'verse': verse,
            'text': clean_verse_text(text),
        })
    # Row ids must follow reading order for range lookups to work
    rows.sort(key=lambda row: (row['book_num'], row['chapter'], row['verse']))
    return rows, skipped


def import_translation(verses_data, metadata):
    """Replace the translation described by ``metadata`` with ``verses_data``.

    Returns the number of verses inserted.
    """
    Base.metadata.create_all(get_engine())
    if language_key(metadata.language_code) is None:
        logger.warning(f"No book names for language '{metadata.language_code}', reading English names")
    rows, skipped = collect_verses(verses_data, metadata.language_code)

    db = SessionLocal()
    try:
        existing = db.query(Translation).filter_by(identifier=metadata.identifier).first()
        if existing:
            db.query(Verse).filter_by(translation_id=existing.id).delete()
            db.delete(existing)
            db.flush()
            logger.info(f"Cleared existing translation {metadata.identifier}")

        translation = Translation(**metadata.model_dump())
        db.add(translation)
        db.flush()

        for start in range(0, len(rows), BATCH_SIZE):
            db.add_all(Verse(translation_id=translation.id, **row) for row in rows[start:start + BATCH_SIZE])
            db.flush()
            logger.info(f"Processed {min(start + BATCH_SIZE, len(rows))} verses...")
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    if skipped:
        logger.warning(f"Skipped {len(skipped)} verses due to unknown book names")
    return len(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a translation from a JSON file of {\"Book C:V\": text}")
    parser.add_argument('json_path', type=Path)
    parser.add_argument('--identifier', required=True, help="Translation identifier, e.g. WEB")
    parser.add_argument('--name', required=True)
    parser.add_argument('--language', default='English')
    parser.add_argument('--language-code', default='eng',
                        help="Three-letter language code; selects the book-name table (eng, spa, por)")
    parser.add_argument('--license', default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        metadata = TranslationCreate(
            identifier=args.identifier,
            name=args.name,
            language=args.language,
            language_code=args.language_code,
            license=args.license,
        )
    except ValidationError as e:
        parser.error(str(e))

    logger.info(f"Reading JSON file from: {args.json_path}")
    with open(args.json_path, 'r', encoding='utf-8') as f:
        verses_data = json.load(f)

    count = import_translation(verses_data, metadata)
    logger.info(f"Import complete! Imported {count} verses into {metadata.identifier}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
