"""
Game Engine

Single-player game state machine: board, cursor, guess evaluation,
eliminated letters and the optional countdown.

All mutations (letter entry, deletion, submission and timer ticks) run under
one re-entrant lock, so the timer thread and the caller never interleave.
Abnormal conditions are modeled as state; no command raises.
"""

import logging
import random
import threading
import unicodedata
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..config.game_settings import GameSettings, fallback_target_word
from ..models.game import GameResult, GameSnapshot, LetterCell, LetterResult, empty_board
from ..utils.normalization import DEFAULT_RULES, upper
from .dictionary_service import Dictionary
from .timer import CountdownTimer

logger = logging.getLogger(__name__)

Listener = Callable[[str, GameSnapshot], None]

# Status priority for keyboard colouring: a letter's best result wins.
_RESULT_PRIORITY = {
    LetterResult.NONE: 0,
    LetterResult.WRONG: 1,
    LetterResult.MISPLACED: 2,
    LetterResult.CORRECT: 3,
}


def evaluate_guess(guess: Sequence[str], target: Sequence[str]) -> List[LetterResult]:
    """
    Implements the two-pass letter evaluation algorithm.

    Pass one marks exact position matches and consumes those target
    positions. Pass two scans the remaining target positions left to right
    for each unmatched guess letter, consuming the first match. This is what
    limits duplicate letters to the number of occurrences in the target.

    Args:
        guess: Guess letters, one element per column
        target: Target letters, same length as guess

    Returns:
        List of CORRECT / MISPLACED / WRONG, one per column
    """
    if len(guess) != len(target):
        raise ValueError("guess and target must have the same length")

    remaining: List[Optional[str]] = list(target)
    result: List[Optional[LetterResult]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            result[i] = LetterResult.CORRECT
            remaining[i] = None

    # Second pass: leftmost unconsumed occurrence elsewhere
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in remaining:
            result[i] = LetterResult.MISPLACED
            remaining[remaining.index(letter)] = None
        else:
            result[i] = LetterResult.WRONG

    return result  # type: ignore[return-value]


class GameEngine:
    """
    One game session.

    The engine is in progress from construction until a guess matches the
    target, the last row is used up, or the countdown reaches zero.
    """

    def __init__(self,
                 settings: GameSettings,
                 dictionary,
                 normalizer: Optional[Callable[[str], str]] = None,
                 rng: Optional[random.Random] = None,
                 start_timer: bool = True,
                 tick_interval: float = 1.0):
        """
        Args:
            settings: Frozen game settings
            dictionary: A Dictionary, or a plain collection of lowercase words
            normalizer: Comparison normalizer; defaults to the dictionary's
            rng: Random source for the target pick
            start_timer: Start the countdown thread now (if the game has a time limit)
            tick_interval: Seconds between countdown ticks
        """
        if not isinstance(dictionary, Dictionary):
            dictionary = Dictionary(dictionary, normalizer)

        self.settings = settings
        self.dictionary = dictionary
        self.normalize = normalizer or dictionary.normalize
        self._rules = getattr(self.normalize, 'rules', DEFAULT_RULES)
        self.tick_interval = tick_interval

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._timer: Optional[CountdownTimer] = None

        self.board: List[List[LetterCell]] = empty_board(settings.guess_limit, settings.word_length)
        self.current_row = 0
        self.current_col = 0
        self.result = GameResult.IN_PROGRESS
        self.eliminated_letters = set()
        self.letter_states: Dict[str, LetterResult] = {}
        self.invalid_word_submitted = False
        self.time_expired = False
        self.remaining_seconds: Optional[int] = (
            settings.time_limit_seconds if settings.has_time_limit else None
        )

        target = dictionary.random_word(settings.word_length, rng)
        if target is None:
            logger.warning("No %d-letter word available, using fallback target", settings.word_length)
            target = self.normalize(fallback_target_word(settings.word_length))
        self.target_word = target

        if settings.has_time_limit and start_timer:
            self.start_timer()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def game_over(self) -> bool:
        return self.result is not GameResult.IN_PROGRESS

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.is_cancelled

    def formatted_time(self) -> str:
        if self.remaining_seconds is None:
            return ""
        return "%d:%02d" % (self.remaining_seconds // 60, self.remaining_seconds % 60)

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return self._snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a state-change listener.

        Listeners are called with (event, snapshot) after every mutation,
        while the engine lock is held, so they observe changes in order.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_letter(self, character: str) -> None:
        with self._lock:
            if self.game_over or self.current_col >= self.settings.word_length:
                return
            if not isinstance(character, str):
                return
            character = unicodedata.normalize("NFC", character.strip())
            if len(character) != 1:
                return
            self.board[self.current_row][self.current_col].character = upper(character, self._rules)
            self.current_col += 1
            self._notify('letter_added')

    def remove_letter(self) -> None:
        with self._lock:
            if self.game_over or self.current_col == 0:
                return
            self.current_col -= 1
            self.board[self.current_row][self.current_col].character = ""
            self._notify('letter_removed')

    def submit_guess(self) -> None:
        with self._lock:
            if self.game_over or self.current_col != self.settings.word_length:
                return

            row = self.board[self.current_row]
            columns = [self.normalize(cell.character) for cell in row]
            guess = "".join(columns)

            if not self.dictionary.contains(guess):
                logger.debug("Rejected guess %s: not in dictionary", guess)
                self.invalid_word_submitted = True
                self._notify('invalid_word')
                return

            results = evaluate_guess(columns, list(self.target_word))
            for cell, letter_result in zip(row, results):
                cell.result = letter_result
                self._update_letter_state(cell.character, letter_result)

            if self.settings.eliminate_wrong_letters:
                self._eliminate_wrong_letters(row, columns)

            if guess == self.target_word:
                self._finish(GameResult.WON)
                self._notify('game_won')
            elif self.current_row + 1 >= self.settings.guess_limit:
                self._finish(GameResult.LOST)
                self._notify('game_lost')
            else:
                self.current_row += 1
                self.current_col = 0
                self._notify('guess_evaluated')

    def acknowledge_invalid_word(self) -> None:
        with self._lock:
            if self.invalid_word_submitted:
                self.invalid_word_submitted = False
                self._notify('signal_cleared')

    def acknowledge_time_expired(self) -> None:
        with self._lock:
            if self.time_expired:
                self.time_expired = False
                self._notify('signal_cleared')

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def start_timer(self) -> None:
        with self._lock:
            if self.remaining_seconds is None or self.game_over or self._timer is not None:
                return
            self._timer = CountdownTimer(self.tick_interval, self.tick)
            self._timer.start()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        with self._lock:
            if self.game_over or self.remaining_seconds is None:
                return
            self.remaining_seconds = max(0, self.remaining_seconds - 1)
            if self.remaining_seconds == 0:
                self.time_expired = True
                self._finish(GameResult.LOST)
                logger.info("Time expired, target was %s", self.target_word)
                self._notify('time_expired')
            else:
                self._notify('tick')

    def dispose(self) -> None:
        """Cancel the countdown and drop listeners. Safe to call repeatedly."""
        with self._lock:
            timer = self._timer
            self._stop_timer()
            self._listeners.clear()
        if timer is not None:
            timer.cancel(wait=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, result: GameResult) -> None:
        self.result = result
        self._stop_timer()
        logger.info("Game finished: %s", result.value)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def _update_letter_state(self, letter: str, letter_result: LetterResult) -> None:
        current = self.letter_states.get(letter, LetterResult.NONE)
        if _RESULT_PRIORITY[letter_result] > _RESULT_PRIORITY[current]:
            self.letter_states[letter] = letter_result

    def _eliminate_wrong_letters(self, row: Iterable[LetterCell], columns: Sequence[str]) -> None:
        # A letter matched anywhere in the row is still in the target.
        row = list(row)
        matched = {
            columns[i] for i, cell in enumerate(row)
            if cell.result in (LetterResult.CORRECT, LetterResult.MISPLACED)
        }
        for i, cell in enumerate(row):
            if cell.result is not LetterResult.WRONG or columns[i] in matched:
                continue
            if self.letter_states.get(cell.character) in (LetterResult.CORRECT, LetterResult.MISPLACED):
                continue
            self.eliminated_letters.add(cell.character)

    def _snapshot(self) -> GameSnapshot:
        board = tuple(
            tuple(LetterCell(cell.character, cell.result) for cell in row)
            for row in self.board
        )
        return GameSnapshot(
            board=board,
            current_row=self.current_row,
            current_col=self.current_col,
            word_length=self.settings.word_length,
            guess_limit=self.settings.guess_limit,
            game_over=self.game_over,
            result=self.result,
            remaining_seconds=self.remaining_seconds,
            formatted_time=self.formatted_time(),
            eliminated_letters=tuple(sorted(self.eliminated_letters)),
            invalid_word_submitted=self.invalid_word_submitted,
            time_expired=self.time_expired,
            target_word=self.target_word if self.game_over else None,
            letter_states=dict(self.letter_states),
        )

    def _notify(self, event: str) -> None:
        if not self._listeners:
            return
        snapshot = self._snapshot()
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception as e:
                logger.error(f"Listener failed on '{event}': {e}")
