"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class LetterResult(Enum):
    """Per-cell evaluation result."""
    NONE = "none"
    CORRECT = "correct"
    MISPLACED = "misplaced"
    WRONG = "wrong"


class GameResult(Enum):
    """Overall game outcome. WON and LOST are terminal."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass
class LetterCell:
    """One board cell. An empty character means the cell is unfilled."""
    character: str = ""
    result: LetterResult = LetterResult.NONE

    def to_dict(self) -> dict:
        return {'character': self.character, 'result': self.result.value}


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of an engine's state, safe to hand to the presentation layer."""
    board: Tuple[Tuple[LetterCell, ...], ...]
    current_row: int
    current_col: int
    word_length: int
    guess_limit: int
    game_over: bool
    result: GameResult
    remaining_seconds: Optional[int]
    formatted_time: str
    eliminated_letters: Tuple[str, ...]
    invalid_word_submitted: bool
    time_expired: bool
    target_word: Optional[str] = None  # Only included when game is over
    letter_states: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """JSON-serializable form used by the REST and WebSocket layers."""
        return {
            'board': [[cell.to_dict() for cell in row] for row in self.board],
            'current_row': self.current_row,
            'current_col': self.current_col,
            'word_length': self.word_length,
            'guess_limit': self.guess_limit,
            'game_over': self.game_over,
            'result': self.result.value,
            'remaining_seconds': self.remaining_seconds,
            'formatted_time': self.formatted_time,
            'eliminated_letters': list(self.eliminated_letters),
            'invalid_word_submitted': self.invalid_word_submitted,
            'time_expired': self.time_expired,
            'target_word': self.target_word,
            'letter_states': {letter: status.value for letter, status in self.letter_states.items()},
        }

    def row_text(self, row: int) -> str:
        return "".join(cell.character for cell in self.board[row])


def empty_board(rows: int, columns: int) -> List[List[LetterCell]]:
    """Board of `rows` x `columns` fresh cells, row-major."""
    return [[LetterCell() for _ in range(columns)] for _ in range(rows)]
