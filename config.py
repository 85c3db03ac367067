# config.py
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv()

class Config:
    SQLITE_DB_PATH = os.path.join(BASE_DIR, 'bible.db')
    DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{SQLITE_DB_PATH}")

    DEFAULT_TRANSLATION = os.getenv('DEFAULT_TRANSLATION', 'WEB')
    DEFAULT_HOST = os.getenv('DEFAULT_HOST', 'bible-api.com')

    # Requests allowed per client address within RATE_LIMIT_PERIOD seconds
    RATE_LIMIT = int(os.getenv('RATE_LIMIT', '15'))
    RATE_LIMIT_PERIOD = int(os.getenv('RATE_LIMIT_PERIOD', '30'))
    REDIS_URL = os.getenv('REDIS_URL')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


@dataclass(frozen=True)
class EngineConfig:
    """Settings the lookup engine needs, passed in explicitly at construction."""
    default_translation: str = 'WEB'
    default_host: str = 'bible-api.com'

    @classmethod
    def from_config(cls, config):
        return cls(
            default_translation=config.DEFAULT_TRANSLATION,
            default_host=config.DEFAULT_HOST,
        )
