import json
import random

from app import create_app
from conftest import AppTestConfig
from database import Base


def body(response):
    return json.loads(response.get_data(as_text=True))


def test_reference_lookup(client):
    response = client.get('/John+3:16')
    assert response.status_code == 200
    assert response.content_type == 'application/json; charset=utf-8'
    data = body(response)
    assert list(data) == [
        'reference', 'verses', 'text', 'translation_id', 'translation_name', 'translation_note',
    ]
    assert data['reference'] == 'John 3:16'
    assert data['verses'] == [{
        'book_id': 'JHN',
        'book_name': 'John',
        'chapter': 3,
        'verse': 16,
        'text': 'For God so loved the world.',
    }]
    assert data['translation_id'] == 'WEB'
    assert data['translation_note'] == 'Public Domain'


def test_range_with_verse_numbers(client):
    response = client.get('/John+3:16-18?verse_numbers=true')
    data = body(response)
    assert [v['verse'] for v in data['verses']] == [16, 17, 18]
    assert data['text'].startswith('(16) For God so loved the world.(17) ')


def test_whole_chapter_uses_translation_versification(client):
    data = body(client.get('/Genesis+1?translation=KJV'))
    assert [v['verse'] for v in data['verses']] == [1, 2]
    assert data['translation_id'] == 'KJV'


def test_ampersand_joins_verses(client):
    data = body(client.get('/John+3:16&18'))
    assert [v['verse'] for v in data['verses']] == [16, 18]
    assert data['reference'] == 'John 3:16,18'


def test_verse_past_kjv_versification(client):
    data = body(client.get('/Revelation+12:17'))
    assert [v['verse'] for v in data['verses']] == [17]
    data = body(client.get('/Revelation+12:18'))
    assert [v['verse'] for v in data['verses']] == [18]


def test_localized_translation(client):
    data = body(client.get('/Juan+3:16?translation=RVR'))
    assert data['reference'] == 'Juan 3:16'
    assert data['verses'][0]['book_name'] == 'Juan'
    assert data['text'] == 'Porque de tal manera amó Dios al mundo.'


def test_unknown_translation(client):
    response = client.get('/John+3:16?translation=NOPE')
    assert response.status_code == 404
    assert body(response) == {'error': 'translation not found'}


def test_unparseable_reference(client):
    response = client.get('/nothing+here')
    assert response.status_code == 404
    assert body(response) == {'error': 'not found'}


def test_reference_missing_from_translation(client):
    response = client.get('/John+3:16?translation=KJV')
    assert response.status_code == 404
    assert body(response) == {'error': 'not found'}


def test_jsonp_callback(client):
    response = client.get('/John+3:16?callback=my.handler')
    assert response.status_code == 200
    assert response.content_type == 'text/javascript; charset=utf-8'
    text = response.get_data(as_text=True)
    assert text.startswith('my.handler({')
    assert text.endswith(')')


def test_jsonp_callback_is_sanitized(client):
    response = client.get('/John+3:16', query_string={'jsoncallback': 'alert("x");$cb'})
    text = response.get_data(as_text=True)
    assert text.startswith('alertx$cb(')


def test_jsonp_wraps_errors_and_keeps_status(client):
    response = client.get('/nothing+here?callback=cb')
    assert response.status_code == 404
    text = response.get_data(as_text=True)
    assert text.startswith('cb(') and text.endswith(')')
    assert json.loads(text[3:-1]) == {'error': 'not found'}


def test_cors_header(client):
    response = client.get('/John+3:16', headers={'Origin': 'https://example.com'})
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_random_verse(db_engine):
    app = create_app(AppTestConfig, rng=random.Random(3))
    response = app.test_client().get('/?random=verse&translation=SMP')
    assert response.status_code == 200
    data = body(response)
    assert len(data['verses']) == 1
    assert data['translation_id'] == 'SMP'
    assert data['text'].startswith('Sampler ')


def test_random_unrecognized_value(client):
    response = client.get('/?random=chapter')
    assert response.status_code == 404
    assert body(response) == {'error': 'unrecognized value for parameter'}


def test_random_data_integrity_fault(db_engine):
    class PickMissingBook:
        def randint(self, a, b):
            return 2

    app = create_app(AppTestConfig, rng=PickMissingBook())
    response = app.test_client().get('/?random=verse&translation=GAP')
    assert response.status_code == 500
    assert body(response) == {'error': 'internal server error'}


def test_index_lists_translations(client):
    response = client.get('/')
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'World English Bible' in html
    assert 'King James Version' in html
    assert 'http://localhost/John 3:16?translation=WEB' in html
    assert 'http://localhost/Juan 3:16?translation=RVR' in html


def test_index_before_import(client, db_engine):
    Base.metadata.drop_all(db_engine)
    response = client.get('/')
    assert response.get_data(as_text=True) == 'please run the import script according to the README'


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert body(response)['status'] == 'healthy'

