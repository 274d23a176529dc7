"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('wordle_engine/config/config.env')


def _env_bool(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Word List Settings
    WORD_LIST_URL = os.getenv(
        'WORD_LIST_URL',
        'https://raw.githubusercontent.com/mertemin/turkish-word-list/master/words.txt'
    )
    WORD_LIST_PATH = os.getenv('WORD_LIST_PATH', 'wordle_engine/config/words.txt')
    WORD_LIST_TIMEOUT_SECONDS = float(os.getenv('WORD_LIST_TIMEOUT_SECONDS', 10))
    USE_LOCAL_WORDS = _env_bool('USE_LOCAL_WORDS')
    LOCALE = os.getenv('LOCALE', 'tr_TR')

    # Game Settings
    DEFAULT_WORD_LENGTH = int(os.getenv('DEFAULT_WORD_LENGTH', 5))
    DEFAULT_GUESS_LIMIT = int(os.getenv('DEFAULT_GUESS_LIMIT', 5))
    DEFAULT_TIME_LIMIT_MINUTES = int(os.getenv('DEFAULT_TIME_LIMIT_MINUTES', 3))
    TICK_INTERVAL_SECONDS = float(os.getenv('TICK_INTERVAL_SECONDS', 1.0))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    USE_LOCAL_WORDS = True
    WORD_LIST_URL = ''


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
