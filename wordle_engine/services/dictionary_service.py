"""
Dictionary Service

Holds the raw word list and a normalized lookup set built from it.
Guesses that differ from a listed word only by case or accents are accepted.
"""

import logging
import random
import unicodedata
from typing import Callable, Iterable, List, Optional

from ..utils.normalization import make_normalizer

logger = logging.getLogger(__name__)


def letter_count(word: str) -> int:
    """Number of letters in a word, not counting combining marks."""
    return sum(1 for ch in word if not unicodedata.combining(ch))


class Dictionary:
    """
    Immutable word collection with normalized membership queries.

    An empty dictionary is a valid value: it answers False to every lookup
    and has no words of any length. Callers decide whether to start a game.
    """

    def __init__(self, words: Iterable[str], normalizer: Optional[Callable[[str], str]] = None):
        self.normalize = normalizer or make_normalizer()
        self._words = tuple(unicodedata.normalize("NFC", word) for word in words)
        self._normalized = frozenset(self.normalize(word) for word in self._words)
        logger.debug("Dictionary built with %d words (%d normalized forms)",
                     len(self._words), len(self._normalized))

    @classmethod
    def from_repository(cls, repository, normalizer: Optional[Callable[[str], str]] = None) -> "Dictionary":
        return cls(repository.load_words_if_needed(), normalizer)

    @property
    def words(self) -> tuple:
        return self._words

    @property
    def is_empty(self) -> bool:
        return not self._words

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, candidate: str) -> bool:
        """True iff the normalized candidate matches a normalized listed word."""
        if not candidate:
            return False
        return self.normalize(candidate) in self._normalized

    __contains__ = contains

    def words_of_length(self, length: int) -> List[str]:
        return [word for word in self._words if letter_count(word) == length]

    def random_word(self, length: int, rng: Optional[random.Random] = None) -> Optional[str]:
        """
        Pick a target word of the given length.

        Returns:
            str: Normalized (upper-case) word, or None if no word has that length
        """
        candidates = [word for word in self.words_of_length(length) if len(self.normalize(word)) == length]
        if not candidates:
            return None
        return self.normalize((rng or random).choice(candidates))
