"""
Word Repository

Acquires the raw word list once per process: remote newline-delimited list
first, then a local fallback file, then (for development) a tiny built-in
list. Failures are logged and leave the repository empty; nothing here raises.
"""

import http.client
import logging
import threading
import unicodedata
import urllib.request
from pathlib import Path
from typing import Callable, Optional, Tuple

from ..utils.normalization import DEFAULT_RULES, LocaleRules, lower

logger = logging.getLogger(__name__)

LOCAL_WORDS: Tuple[str, ...] = ("kalem", "bursa", "izmir", "kitap", "kalemlik")
"""Development word list used when USE_LOCAL_WORDS is enabled."""


def parse_word_list(text: str, rules: LocaleRules = DEFAULT_RULES) -> list:
    """
    Parse a newline-delimited word list.

    Tokens are trimmed, composed to NFC and lower-cased with the locale rules.
    Empty tokens and tokens with spaces, hyphens or any non-letter character
    are dropped. Combining marks that have no precomposed form are kept when
    they follow a letter.
    """
    words = []
    for line in text.splitlines():
        token = unicodedata.normalize("NFC", lower(line.strip(), rules))
        if not token or " " in token or "-" in token:
            continue
        if not _is_word(token):
            continue
        words.append(token)
    return words


def _is_word(token: str) -> bool:
    if not token[0].isalpha():
        return False
    return all(ch.isalpha() or unicodedata.combining(ch) for ch in token)


def fetch_url(url: str, timeout: float) -> str:
    """Download a UTF-8 text document."""
    request = urllib.request.Request(url, headers={"User-Agent": "wordle-engine"})
    with urllib.request.urlopen(request, timeout=timeout) as response:
        return response.read().decode("utf-8")


class WordRepository:
    """
    Process-wide cache of the raw word list.

    Constructed once by the entry point and passed down; the engine never
    reaches for it directly.
    """

    def __init__(self,
                 source_url: Optional[str] = None,
                 fallback_path: Optional[str] = None,
                 use_local_words: bool = False,
                 rules: LocaleRules = DEFAULT_RULES,
                 timeout: float = 10.0,
                 fetcher: Callable[[str, float], str] = fetch_url):
        self.source_url = source_url
        self.fallback_path = fallback_path
        self.use_local_words = use_local_words
        self.rules = rules
        self.timeout = timeout
        self._fetcher = fetcher
        self._words: Tuple[str, ...] = ()
        self._lock = threading.Lock()

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def load_words_if_needed(self) -> Tuple[str, ...]:
        """
        Load the word list unless it is already loaded.

        Returns:
            tuple: The loaded words (empty if every source failed)
        """
        with self._lock:
            if self._words:
                return self._words

            if self.use_local_words:
                self._words = LOCAL_WORDS
                logger.info("Using built-in local word list (%d words)", len(self._words))
                return self._words

            words = self._load_from_url() or self._load_from_file()
            self._words = tuple(words)
            if not self._words:
                logger.warning("Word list unavailable: all sources failed or were empty")
            return self._words

    def _load_from_url(self) -> list:
        if not self.source_url:
            return []
        try:
            text = self._fetcher(self.source_url, self.timeout)
        except (OSError, ValueError, http.client.HTTPException) as e:
            logger.error("Failed to fetch word list from %s: %s", self.source_url, e)
            return []
        words = parse_word_list(text, self.rules)
        logger.info("Fetched %d words from %s", len(words), self.source_url)
        return words

    def _load_from_file(self) -> list:
        if not self.fallback_path:
            return []
        path = Path(self.fallback_path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read word list file %s: %s", path, e)
            return []
        words = parse_word_list(text, self.rules)
        logger.info("Loaded %d words from %s", len(words), path)
        return words
