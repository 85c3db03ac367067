# utils/formatting.py
from schemas.verse_schemas import VerseRecord, VerseResult


def verse_text(verses, verse_numbers=False):
    """Concatenate verse texts with no separator, optionally prefixed "(n) "."""
    if verse_numbers:
        return ''.join(f"({v.verse}) {v.text}" for v in verses)
    return ''.join(v.text for v in verses)


def format_result(verses, translation, reference, verse_numbers=False):
    return VerseResult(
        reference=reference,
        verses=[VerseRecord.from_row(v) for v in verses],
        text=verse_text(verses, verse_numbers),
        translation_id=translation.identifier,
        translation_name=translation.name,
        translation_note=translation.license,
    )
