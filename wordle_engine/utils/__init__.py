"""
Utilities Package

Contains normalization, logging, decorators and helper modules.
"""

from .decorators import require_game, websocket_game_required
from .helpers import get_user_identity
from .game_logger import game_logger
from .normalization import (
    DEFAULT_RULES, TURKISH_RULES, LocaleRules, get_locale_rules, make_normalizer, normalize
)

__all__ = [
    'require_game', 'websocket_game_required', 'get_user_identity', 'game_logger',
    'DEFAULT_RULES', 'TURKISH_RULES', 'LocaleRules', 'get_locale_rules', 'make_normalizer', 'normalize'
]
