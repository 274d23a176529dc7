"""
Game Service

Registry of running game engines, keyed by game id.
"""

import logging
import threading
import uuid
from typing import Dict, Optional

from ..config.game_settings import GameSettings, validate_settings
from ..models.game import GameSnapshot
from .dictionary_service import Dictionary
from .game_engine import GameEngine

logger = logging.getLogger(__name__)

SIGNALS = ('invalid_word', 'time_expired')


class DictionaryUnavailableError(Exception):
    """Raised when a game is requested but the dictionary is empty."""


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Starting engines against the shared dictionary
    - Forwarding player commands to the right engine
    - Disposing engines (and their timers) when a session ends
    """

    def __init__(self, dictionary: Dictionary, tick_interval: float = 1.0, start_timers: bool = True):
        self.dictionary = dictionary
        self.tick_interval = tick_interval
        self.start_timers = start_timers
        self.games: Dict[str, GameEngine] = {}
        self._lock = threading.Lock()

    @property
    def active_games(self) -> int:
        return len(self.games)

    def create_new_game(self, settings: Optional[GameSettings] = None) -> str:
        """
        Creates a new game session with a randomly selected target word.

        Args:
            settings: Game settings; defaults apply when omitted

        Returns:
            str: Unique game ID for this session

        Raises:
            DictionaryUnavailableError: If the word list could not be loaded
            ValueError: If the settings are not playable
        """
        settings = settings or GameSettings()
        validate_settings(settings)

        if self.dictionary.is_empty:
            raise DictionaryUnavailableError("Word list is not available")

        engine = GameEngine(
            settings,
            self.dictionary,
            start_timer=self.start_timers,
            tick_interval=self.tick_interval,
        )
        game_id = str(uuid.uuid4())
        with self._lock:
            self.games[game_id] = engine
        logger.info("Created game %s (%d letters, %d guesses, timer=%s)",
                    game_id, settings.word_length, settings.guess_limit, settings.has_time_limit)
        return game_id

    def get_engine(self, game_id: str) -> Optional[GameEngine]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[GameSnapshot]:
        """
        Returns the current game state for a session (without revealing the answer).

        Returns:
            GameSnapshot or None if game not found
        """
        engine = self.get_engine(game_id)
        if engine is None:
            return None
        return engine.snapshot()

    def add_letter(self, game_id: str, letter: str) -> Optional[GameSnapshot]:
        engine = self.get_engine(game_id)
        if engine is None:
            return None
        engine.add_letter(letter)
        return engine.snapshot()

    def remove_letter(self, game_id: str) -> Optional[GameSnapshot]:
        engine = self.get_engine(game_id)
        if engine is None:
            return None
        engine.remove_letter()
        return engine.snapshot()

    def submit_guess(self, game_id: str) -> Optional[GameSnapshot]:
        engine = self.get_engine(game_id)
        if engine is None:
            return None
        engine.submit_guess()
        return engine.snapshot()

    def acknowledge(self, game_id: str, signal: str) -> Optional[GameSnapshot]:
        """
        Clears a one-shot signal after the client has displayed it.

        Raises:
            ValueError: If the signal name is unknown
        """
        if signal not in SIGNALS:
            raise ValueError(f"Unknown signal '{signal}'. Must be one of {list(SIGNALS)}")
        engine = self.get_engine(game_id)
        if engine is None:
            return None
        if signal == 'invalid_word':
            engine.acknowledge_invalid_word()
        else:
            engine.acknowledge_time_expired()
        return engine.snapshot()

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session and disposes its engine.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            engine = self.games.pop(game_id, None)
        if engine is None:
            return False
        engine.dispose()
        return True

    def shutdown(self) -> None:
        """Dispose every running engine."""
        with self._lock:
            engines = list(self.games.values())
            self.games.clear()
        for engine in engines:
            engine.dispose()


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(dictionary: Dictionary, tick_interval: float = 1.0,
                            start_timers: bool = True) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if _game_service is not None:
        _game_service.shutdown()
    _game_service = GameService(dictionary, tick_interval=tick_interval, start_timers=start_timers)
    return _game_service
