"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and the per-game settings value (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALLOWED_WORD_LENGTHS, ALLOWED_GUESS_LIMITS, ALLOWED_TIME_LIMITS,
    FALLBACK_TARGET_WORD, GameSettings, fallback_target_word, validate_settings
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ALLOWED_WORD_LENGTHS', 'ALLOWED_GUESS_LIMITS', 'ALLOWED_TIME_LIMITS',
    'FALLBACK_TARGET_WORD', 'GameSettings', 'fallback_target_word', 'validate_settings'
]
