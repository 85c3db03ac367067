# routes/verses.py
from flask import Blueprint, current_app, render_template, request
import logging
import time
from sqlalchemy import text

from database import get_db_session, has_verses_table
from utils.jsonp import jsonp
from utils.results import Found
from utils.verse_lookup import book_names_for, list_translations

verses_bp = Blueprint('verses', __name__)
logger = logging.getLogger(__name__)

SETUP_MESSAGE = 'please run the import script according to the README'


def _engine():
    return current_app.extensions['verse_engine']


def _lookup(reference_text, random=None):
    """Run a lookup with the request's query parameters and render the outcome."""
    translation = request.args.get('translation')
    verse_numbers = request.args.get('verse_numbers') == 'true'
    try:
        outcome = _engine().resolve(
            reference_text,
            translation_identifier=translation,
            verse_numbers=verse_numbers,
            random=random,
        )
    except Exception as e:
        logger.error(f"Error looking up '{reference_text}' ({translation}): {str(e)}", exc_info=True)
        return jsonp({'error': 'internal server error'}, status=500)

    if not isinstance(outcome, Found):
        logger.info(f"Lookup of '{reference_text}' ({translation}): {outcome.error}")
    return jsonp(outcome.to_dict(), status=outcome.status)


@verses_bp.route('/', methods=['GET'])
def index():
    if not has_verses_table():
        return SETUP_MESSAGE, 200, {'Content-Type': 'text/plain; charset=utf-8'}

    if 'random' in request.args:
        return _lookup(None, random=request.args.get('random'))

    with get_db_session() as db:
        translations = [
            {
                'identifier': t.identifier,
                'language': t.language,
                'name': t.name,
                'john': john,
            }
            for t, john in _with_john(db, list_translations(db))
        ]

    server_name = request.environ.get('SERVER_NAME') or _engine().config.default_host
    host = f"{request.scheme}://{server_name}/"
    default_translation = _engine().config.default_translation
    return render_template(
        'index.html',
        translations=translations,
        host=host,
        default_translation=default_translation,
    )


def _with_john(db, translations):
    names = book_names_for(db, 'JHN')
    for translation in translations:
        yield translation, names.get(translation.id, 'John')


@verses_bp.route('/<ref>', methods=['GET'])
def get_reference(ref):
    ref_string = ref.replace('+', ' ')
    return _lookup(ref_string)


@verses_bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint that also verifies the datastore connection"""
    try:
        with get_db_session() as db:
            db.execute(text('SELECT 1'))
        return jsonp({
            'status': 'healthy',
            'database': 'connected',
            'timestamp': time.time()
        })
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return jsonp({
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': time.time()
        }, status=500)
