import json

from config import EngineConfig
from database import SessionLocal
from models import Translation, Verse
from schemas.verse_schemas import TranslationCreate
from scripts.import_translation import collect_verses, import_translation, main, parse_reference
from utils.engine import VerseEngine
from utils.results import Found

SAMPLE = {
    'John 1:2': 'The same was in the beginning with God.',
    'Genesis 1:2': 'And the earth was without form.',
    'John 1:1': 'In the beginning was the Word.',
    'Genesis 1:1': '#In the beginning God created.',
    "Solomon's Song 1:1": 'The song of songs.',
    'Hezekiah 1:1': 'Not a book.',
}

METADATA = TranslationCreate(identifier='TST', name='Test Translation', license='Public Domain')


def test_parse_reference():
    assert parse_reference('1 John 4:8') == ('1 John', 4, 8)
    assert parse_reference('Song of Solomon 2:1') == ('Song of Solomon', 2, 1)


def test_collect_verses_sorts_in_reading_order():
    rows, skipped = collect_verses(SAMPLE)
    assert [(r['book_id'], r['chapter'], r['verse']) for r in rows] == [
        ('GEN', 1, 1), ('GEN', 1, 2), ('SNG', 1, 1), ('JHN', 1, 1), ('JHN', 1, 2),
    ]
    assert rows[0]['text'] == 'In the beginning God created.'
    assert rows[2]['book_num'] == 22
    assert skipped == ['Hezekiah 1:1']


def test_import_assigns_ids_in_reading_order(db_engine):
    assert import_translation(SAMPLE, METADATA) == 5

    db = SessionLocal()
    try:
        translation = db.query(Translation).filter_by(identifier='TST').one()
        verses = db.query(Verse).filter_by(translation_id=translation.id).order_by(Verse.id).all()
        assert [(v.book_num, v.chapter, v.verse) for v in verses] == sorted(
            (v.book_num, v.chapter, v.verse) for v in verses
        )
        assert translation.language_code == 'eng'
    finally:
        db.close()


def test_reimport_replaces_existing_translation(db_engine):
    import_translation(SAMPLE, METADATA)
    import_translation({'Genesis 1:1': 'Only verse.'}, METADATA)

    db = SessionLocal()
    try:
        assert db.query(Translation).filter_by(identifier='TST').count() == 1
        translation = db.query(Translation).filter_by(identifier='TST').one()
        assert [v.text for v in db.query(Verse).filter_by(translation_id=translation.id)] == ['Only verse.']
    finally:
        db.close()


SPANISH = {
    'Juan 3:16': 'Porque de tal manera amó Dios al mundo.',
    '1 Juan 4:8': 'El que no ama, no ha conocido a Dios.',
    'Génesis 1:1': 'En el principio creó Dios los cielos y la tierra.',
    'Hechos 1:1': 'En el primer tratado, oh Teófilo.',
}


def test_collect_verses_reads_names_in_translation_language():
    rows, skipped = collect_verses(SPANISH, 'spa')
    assert [(r['book_id'], r['book'], r['book_num']) for r in rows] == [
        ('GEN', 'Génesis', 1), ('JHN', 'Juan', 43), ('ACT', 'Hechos', 44), ('1JN', '1 Juan', 62),
    ]
    assert skipped == []


def test_localized_names_need_their_language_code():
    rows, skipped = collect_verses({'Juan 3:16': 'Porque de tal manera.'})
    assert rows == []
    assert skipped == ['Juan 3:16']


def test_imported_localized_translation_round_trips(db_engine, tmp_path):
    path = tmp_path / 'rva.json'
    path.write_text(json.dumps(SPANISH), encoding='utf-8')
    assert main([
        str(path), '--identifier', 'RVA', '--name', 'Reina-Valera Antigua',
        '--language', 'Spanish', '--language-code', 'spa',
    ]) == 0

    engine = VerseEngine(config=EngineConfig())
    outcome = engine.resolve('Hechos 1:1', 'RVA')
    assert isinstance(outcome, Found)
    assert outcome.result.reference == 'Hechos 1:1'
    assert outcome.result.verses[0].book_name == 'Hechos'
