"""
Game Configuration Constants Module

Defines the game rules: which board sizes and time limits a player may
choose, the fallback target word, and the immutable per-game settings value
handed to the engine when a game starts.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Final, Optional, Tuple

ALLOWED_WORD_LENGTHS: Final[Tuple[int, ...]] = (4, 5, 6)
"""Word lengths offered by the settings screen."""

ALLOWED_GUESS_LIMITS: Final[Tuple[int, ...]] = (4, 5, 6)

ALLOWED_TIME_LIMITS: Final[Tuple[int, ...]] = (1, 2, 3, 4, 5)
"""Time limit choices in minutes, only used when the time limit is enabled."""

FALLBACK_TARGET_WORD: Final[str] = "APPLE"
"""
Target used when the dictionary holds no word of the requested length,
so a game is always playable.
"""

FALLBACK_TARGET_WORDS: Final[Dict[int, str]] = {4: "PEAR", 5: FALLBACK_TARGET_WORD, 6: "BANANA"}

SECONDS_PER_MINUTE: Final[int] = 60


def fallback_target_word(word_length: int) -> str:
    """Fallback target that fits the board, for any word length."""
    word = FALLBACK_TARGET_WORDS.get(word_length)
    if word is None:
        word = (FALLBACK_TARGET_WORD * (word_length // len(FALLBACK_TARGET_WORD) + 1))[:word_length]
    return word


@dataclass(frozen=True)
class GameSettings:
    """Per-game settings. Frozen: a running game never sees them change."""
    word_length: int = 5
    guess_limit: int = 5
    has_time_limit: bool = False
    time_limit_minutes: int = 3
    eliminate_wrong_letters: bool = False

    @property
    def time_limit_seconds(self) -> int:
        return self.time_limit_minutes * SECONDS_PER_MINUTE

    @classmethod
    def from_dict(cls, data: Dict[str, Any], defaults: Optional["GameSettings"] = None) -> "GameSettings":
        """
        Build settings from a JSON-style payload.

        Missing keys take the value from `defaults`. The result is validated.

        Raises:
            ValueError: If a field has the wrong type or an unsupported value
        """
        base = defaults or cls()
        data = data or {}

        settings = cls(
            word_length=_as_int(data, 'word_length', base.word_length),
            guess_limit=_as_int(data, 'guess_limit', base.guess_limit),
            has_time_limit=_as_bool(data, 'has_time_limit', base.has_time_limit),
            time_limit_minutes=_as_int(data, 'time_limit_minutes', base.time_limit_minutes),
            eliminate_wrong_letters=_as_bool(data, 'eliminate_wrong_letters', base.eliminate_wrong_letters),
        )
        validate_settings(settings)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _as_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    return value


def _as_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be a boolean")
    return value


def validate_settings(settings: GameSettings) -> bool:
    """
    Validates a settings value against the game rules.

    Returns:
        bool: True if the settings are playable

    Raises:
        ValueError: With a message naming the offending field
    """
    if settings.word_length not in ALLOWED_WORD_LENGTHS:
        raise ValueError(f"word_length must be one of {list(ALLOWED_WORD_LENGTHS)}")

    if settings.guess_limit not in ALLOWED_GUESS_LIMITS:
        raise ValueError(f"guess_limit must be one of {list(ALLOWED_GUESS_LIMITS)}")

    if settings.has_time_limit and settings.time_limit_minutes not in ALLOWED_TIME_LIMITS:
        raise ValueError(f"time_limit_minutes must be one of {list(ALLOWED_TIME_LIMITS)}")

    return True
