# app.py
from flask import Flask, request, g
from flask_cors import CORS
from routes.verses import verses_bp
from config import Config, EngineConfig
from database import configure_engine
from utils.engine import VerseEngine
from utils.throttle import init_throttle
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

# Configure logging to output to stdout
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(config_object=Config, engine_kwargs=None, parser=None, rng=None):
    """Build the Flask app.

    ``parser`` and ``rng`` replace the reference parser and the random source
    of the lookup engine; both default to the production ones.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Use ProxyFix to handle proxy headers properly (client address and scheme)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.ensure_ascii = False

    # Any origin may read verses
    CORS(app, resources={
        r"/*": {
            "origins": "*",
            "methods": ["GET", "OPTIONS"],
            "send_wildcard": True,
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    configure_engine(config_object.DATABASE_URL, **(engine_kwargs or {}))

    app.extensions['verse_engine'] = VerseEngine(
        config=EngineConfig.from_config(config_object),
        parser=parser,
        rng=rng,
    )

    init_throttle(
        app,
        limit=config_object.RATE_LIMIT,
        period=config_object.RATE_LIMIT_PERIOD,
        redis_url=config_object.REDIS_URL,
    )

    app.register_blueprint(verses_bp)

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        # Log request duration
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    return app


app = create_app()

if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
