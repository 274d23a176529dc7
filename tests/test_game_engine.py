import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wordle_engine.config.game_settings import GameSettings
from wordle_engine.models.game import GameResult, LetterResult
from wordle_engine.services.dictionary_service import Dictionary
from wordle_engine.services.game_engine import GameEngine
from wordle_engine.utils.normalization import TURKISH_RULES, make_normalizer

WORDS = ["kalem", "bursa", "lamer", "kitap", "terim", "lllll", "şeker", "masa"]


def type_word(engine, word):
    for letter in word:
        engine.add_letter(letter)


def make_engine(target="KALEM", words=WORDS, **settings):
    engine = GameEngine(GameSettings(**settings), words, start_timer=False)
    engine.target_word = target
    return engine


class TestLetterEntry(unittest.TestCase):
    def test_initial_state(self):
        engine = make_engine(guess_limit=6, word_length=5)
        state = engine.snapshot()
        self.assertEqual(len(state.board), 6)
        self.assertTrue(all(len(row) == 5 for row in state.board))
        self.assertEqual((state.current_row, state.current_col), (0, 0))
        self.assertFalse(state.game_over)
        self.assertIs(state.result, GameResult.IN_PROGRESS)
        self.assertIsNone(state.remaining_seconds)
        self.assertEqual(state.formatted_time, "")
        self.assertIsNone(state.target_word)

    def test_target_picked_from_words_of_length(self):
        engine = GameEngine(GameSettings(word_length=4), WORDS, start_timer=False)
        self.assertEqual(engine.target_word, "MASA")

    def test_decomposed_word_can_be_target(self):
        engine = GameEngine(GameSettings(), ["s\u0327eker"], start_timer=False)
        self.assertEqual(engine.target_word, "SEKER")

    def test_fallback_target_when_no_word_fits(self):
        engine = GameEngine(GameSettings(word_length=5), [], start_timer=False)
        self.assertEqual(engine.target_word, "APPLE")
        engine = GameEngine(GameSettings(word_length=6), ["kalem"], start_timer=False)
        self.assertEqual(len(engine.target_word), 6)

    def test_add_letter_uppercases_and_advances(self):
        engine = make_engine()
        engine.add_letter("k")
        self.assertEqual(engine.board[0][0].character, "K")
        self.assertEqual(engine.current_col, 1)

    def test_add_letter_ignored_when_row_full(self):
        engine = make_engine()
        type_word(engine, "kalemx")
        self.assertEqual(engine.current_col, 5)
        self.assertEqual(engine.snapshot().row_text(0), "KALEM")

    def test_add_letter_ignores_invalid_input(self):
        engine = make_engine()
        engine.add_letter("")
        engine.add_letter("ab")
        engine.add_letter(None)
        self.assertEqual(engine.current_col, 0)

    def test_add_letter_uses_locale_casing(self):
        engine = GameEngine(GameSettings(), ["terim"], normalizer=make_normalizer(TURKISH_RULES),
                            start_timer=False)
        engine.add_letter("i")
        self.assertEqual(engine.board[0][0].character, "İ")

    def test_remove_letter_clears_previous_cell(self):
        engine = make_engine()
        type_word(engine, "ka")
        engine.remove_letter()
        self.assertEqual(engine.current_col, 1)
        self.assertEqual(engine.board[0][1].character, "")
        self.assertEqual(engine.board[0][0].character, "K")

    def test_remove_letter_at_row_start_is_a_no_op(self):
        engine = make_engine()
        before = engine.snapshot().to_dict()
        engine.remove_letter()
        engine.remove_letter()
        self.assertEqual(engine.snapshot().to_dict(), before)


class TestSubmitGuess(unittest.TestCase):
    def test_incomplete_row_is_ignored(self):
        engine = make_engine()
        type_word(engine, "kal")
        engine.submit_guess()
        self.assertEqual((engine.current_row, engine.current_col), (0, 3))
        self.assertFalse(engine.invalid_word_submitted)

    def test_invalid_word_leaves_row_editable(self):
        engine = make_engine()
        type_word(engine, "xyzqw")
        engine.submit_guess()

        self.assertTrue(engine.invalid_word_submitted)
        self.assertEqual((engine.current_row, engine.current_col), (0, 5))
        self.assertTrue(all(cell.result is LetterResult.NONE for cell in engine.board[0]))
        self.assertFalse(engine.game_over)

        engine.remove_letter()
        self.assertEqual(engine.current_col, 4)

        engine.acknowledge_invalid_word()
        self.assertFalse(engine.invalid_word_submitted)

    def test_valid_guess_is_evaluated_and_advances(self):
        engine = make_engine()
        type_word(engine, "lamer")
        engine.submit_guess()

        results = [cell.result for cell in engine.board[0]]
        self.assertEqual(results, [
            LetterResult.MISPLACED, LetterResult.CORRECT, LetterResult.MISPLACED,
            LetterResult.CORRECT, LetterResult.WRONG
        ])
        self.assertEqual((engine.current_row, engine.current_col), (1, 0))
        self.assertFalse(engine.game_over)

    def test_winning_guess(self):
        engine = make_engine()
        type_word(engine, "kalem")
        engine.submit_guess()

        state = engine.snapshot()
        self.assertIs(state.result, GameResult.WON)
        self.assertTrue(state.game_over)
        self.assertEqual(state.target_word, "KALEM")
        self.assertTrue(all(cell.result is LetterResult.CORRECT for cell in state.board[0]))

    def test_no_mutation_after_win(self):
        engine = make_engine()
        type_word(engine, "kalem")
        engine.submit_guess()
        before = engine.snapshot().to_dict()

        engine.remove_letter()
        engine.add_letter("a")
        engine.submit_guess()
        self.assertEqual(engine.snapshot().to_dict(), before)

    def test_loss_after_guess_limit(self):
        engine = make_engine(guess_limit=2)
        type_word(engine, "bursa")
        engine.submit_guess()
        type_word(engine, "terim")
        engine.submit_guess()

        self.assertIs(engine.result, GameResult.LOST)
        self.assertTrue(engine.game_over)
        self.assertEqual(engine.current_row, 1)
        self.assertEqual(engine.snapshot().target_word, "KALEM")

    def test_guess_accepted_without_diacritics(self):
        engine = make_engine(target="SEKER")
        type_word(engine, "SEKER")
        engine.submit_guess()
        self.assertFalse(engine.invalid_word_submitted)
        self.assertIs(engine.result, GameResult.WON)

    def test_capital_dotted_i_is_accepted(self):
        engine = GameEngine(GameSettings(), ["terim"], normalizer=make_normalizer(TURKISH_RULES),
                            start_timer=False)
        engine.target_word = "KALEM"
        for letter in ["T", "E", "R", "İ", "M"]:
            engine.add_letter(letter)
        engine.submit_guess()
        self.assertFalse(engine.invalid_word_submitted)
        self.assertEqual(engine.current_row, 1)


class TestEliminatedLetters(unittest.TestCase):
    def test_wrong_letters_are_eliminated(self):
        engine = make_engine(eliminate_wrong_letters=True)
        type_word(engine, "bursa")
        engine.submit_guess()
        self.assertEqual(engine.eliminated_letters, {"B", "U", "R", "S"})

    def test_letter_matched_elsewhere_in_row_is_kept(self):
        engine = make_engine(eliminate_wrong_letters=True)
        type_word(engine, "lllll")
        engine.submit_guess()

        results = [cell.result for cell in engine.board[0]]
        self.assertIn(LetterResult.WRONG, results)
        self.assertIn(LetterResult.CORRECT, results)
        self.assertNotIn("L", engine.eliminated_letters)

    def test_elimination_disabled(self):
        engine = make_engine()
        type_word(engine, "bursa")
        engine.submit_guess()
        self.assertEqual(engine.eliminated_letters, set())

    def test_eliminated_set_only_grows(self):
        engine = make_engine(eliminate_wrong_letters=True)
        type_word(engine, "bursa")
        engine.submit_guess()
        type_word(engine, "kitap")
        engine.submit_guess()
        self.assertTrue({"B", "U", "R", "S", "I", "T", "P"} <= engine.eliminated_letters)
        self.assertNotIn("K", engine.eliminated_letters)
        self.assertNotIn("A", engine.eliminated_letters)

    def test_letter_states_keep_best_result(self):
        engine = make_engine()
        type_word(engine, "bursa")
        engine.submit_guess()
        self.assertIs(engine.letter_states["A"], LetterResult.MISPLACED)
        type_word(engine, "lamer")
        engine.submit_guess()
        self.assertIs(engine.letter_states["A"], LetterResult.CORRECT)
        self.assertIs(engine.letter_states["R"], LetterResult.WRONG)


class TestListeners(unittest.TestCase):
    def test_events_are_published(self):
        engine = make_engine()
        events = []
        unsubscribe = engine.subscribe(lambda event, state: events.append((event, state.current_col)))

        engine.add_letter("k")
        engine.remove_letter()
        engine.remove_letter()
        type_word(engine, "xyzqw")
        engine.submit_guess()
        engine.acknowledge_invalid_word()

        self.assertEqual(events[0], ("letter_added", 1))
        self.assertEqual(events[1], ("letter_removed", 0))
        self.assertEqual([event for event, _ in events[-2:]], ["invalid_word", "signal_cleared"])

        unsubscribe()
        engine.remove_letter()
        self.assertEqual(events[-1][0], "signal_cleared")

    def test_failing_listener_does_not_break_engine(self):
        engine = make_engine()

        def broken(event, state):
            raise RuntimeError("boom")

        engine.subscribe(broken)
        type_word(engine, "kalem")
        engine.submit_guess()
        self.assertIs(engine.result, GameResult.WON)

    def test_game_won_event(self):
        engine = make_engine()
        events = []
        engine.subscribe(lambda event, state: events.append(event))
        type_word(engine, "kalem")
        engine.submit_guess()
        self.assertEqual(events[-1], "game_won")


if __name__ == '__main__':
    unittest.main()
