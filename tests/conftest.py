import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from app import create_app
from config import Config
from database import Base, SessionLocal, configure_engine
from models import Translation, Verse


class AppTestConfig(Config):
    TESTING = True
    DATABASE_URL = 'sqlite://'
    DEFAULT_TRANSLATION = 'WEB'
    RATE_LIMIT = 1000
    RATE_LIMIT_PERIOD = 30
    REDIS_URL = None


TRANSLATIONS = [
    dict(id=1, identifier='WEB', name='World English Bible', language='English',
         language_code='eng', license='Public Domain'),
    dict(id=2, identifier='KJV', name='King James Version', language='English',
         language_code='eng', license='Public Domain'),
    # Two books; Exodus has three chapters and chapter 3 has five verses
    dict(id=3, identifier='SMP', name='Sampler Fixture', language='English',
         language_code='eng', license=None),
    # book_num 2 is missing
    dict(id=4, identifier='GAP', name='Gapped Fixture', language='English',
         language_code='eng', license=None),
    dict(id=5, identifier='RVR', name='Reina-Valera Fixture', language='Spanish',
         language_code='spa', license='Public Domain'),
]

VERSES = [
    (1, 1, 'GEN', 'Genesis', 1, 1, 1, 'In the beginning'),
    (2, 1, 'GEN', 'Genesis', 1, 1, 2, 'the earth'),
    (3, 1, 'GEN', 'Genesis', 1, 1, 3, 'Let there be light.'),
    (4, 1, 'GEN', 'Genesis', 1, 2, 1, 'The heavens and the earth were finished.'),
    (5, 1, 'GEN', 'Genesis', 1, 2, 2, 'On the seventh day God finished his work.'),
    (6, 1, 'JHN', 'John', 43, 3, 16, 'For God so loved the world.'),
    (7, 1, 'JHN', 'John', 43, 3, 17, "For God didn't send his Son."),
    (8, 1, 'JHN', 'John', 43, 3, 18, 'He who believes in him is not judged.'),

    (9, 2, 'GEN', 'Genesis', 1, 1, 1, 'In the beginning God created the heaven and the earth.'),
    (10, 2, 'GEN', 'Genesis', 1, 1, 2, 'And the earth was without form, and void.'),

    (11, 3, 'GEN', 'Genesis', 1, 1, 1, 'Sampler Genesis 1:1'),
    (12, 3, 'GEN', 'Genesis', 1, 1, 2, 'Sampler Genesis 1:2'),
    (13, 3, 'EXO', 'Exodus', 2, 1, 1, 'Sampler Exodus 1:1'),
    (14, 3, 'EXO', 'Exodus', 2, 1, 2, 'Sampler Exodus 1:2'),
    (15, 3, 'EXO', 'Exodus', 2, 2, 1, 'Sampler Exodus 2:1'),
    (16, 3, 'EXO', 'Exodus', 2, 3, 1, 'Sampler Exodus 3:1'),
    (17, 3, 'EXO', 'Exodus', 2, 3, 2, 'Sampler Exodus 3:2'),
    (18, 3, 'EXO', 'Exodus', 2, 3, 3, 'Sampler Exodus 3:3'),
    (19, 3, 'EXO', 'Exodus', 2, 3, 4, 'Sampler Exodus 3:4'),
    (20, 3, 'EXO', 'Exodus', 2, 3, 5, 'Sampler Exodus 3:5'),

    (21, 4, 'GEN', 'Genesis', 1, 1, 1, 'Gapped Genesis 1:1'),
    (22, 4, 'LEV', 'Leviticus', 3, 1, 1, 'Gapped Leviticus 1:1'),

    # WEB verses past the last verse in KJV versification
    (23, 1, '3JN', '3 John', 64, 1, 14, 'I hope to see you soon.'),
    (24, 1, '3JN', '3 John', 64, 1, 15, 'Peace be to you.'),
    (25, 1, 'REV', 'Revelation', 66, 12, 16, 'The earth helped the woman.'),
    (26, 1, 'REV', 'Revelation', 66, 12, 17, 'The dragon grew angry with the woman.'),
    (27, 1, 'REV', 'Revelation', 66, 12, 18, 'Then he stood on the sand of the sea.'),

    (28, 5, 'GEN', 'Génesis', 1, 1, 1, 'En el principio creó Dios los cielos y la tierra.'),
    (29, 5, 'JHN', 'Juan', 43, 3, 16, 'Porque de tal manera amó Dios al mundo.'),
    (30, 5, 'JHN', 'Juan', 43, 3, 17, 'Porque no envió Dios a su Hijo al mundo para condenar al mundo.'),
]


def seed(session):
    session.add_all(
        Translation(**t) for t in TRANSLATIONS
    )
    session.flush()
    session.add_all(
        Verse(id=vid, translation_id=tid, book_id=book_id, book=book, book_num=book_num,
              chapter=chapter, verse=verse, text=text)
        for vid, tid, book_id, book, book_num, chapter, verse, text in VERSES
    )
    session.commit()


@pytest.fixture
def db_engine():
    engine = configure_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(db_engine):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def statements(db_engine):
    """SQL statements issued against the test database while the test runs."""
    recorded = []

    def record(conn, cursor, statement, parameters, context, executemany):
        recorded.append(statement)

    event.listen(db_engine, 'before_cursor_execute', record)
    yield recorded
    event.remove(db_engine, 'before_cursor_execute', record)


@pytest.fixture
def app(db_engine):
    return create_app(AppTestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
