"""
Services Package

Contains all business logic and service classes.
"""

from .dictionary_service import Dictionary
from .game_engine import GameEngine, evaluate_guess
from .game_service import DictionaryUnavailableError, GameService, get_game_service, initialize_game_service
from .timer import CountdownTimer
from .word_repository import WordRepository, parse_word_list

__all__ = [
    'Dictionary',
    'GameEngine', 'evaluate_guess',
    'DictionaryUnavailableError', 'GameService', 'get_game_service', 'initialize_game_service',
    'CountdownTimer',
    'WordRepository', 'parse_word_list'
]
