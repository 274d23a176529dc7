import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wordle_engine import create_app
from wordle_engine.config import TestingConfig
from wordle_engine.config.game_settings import GameSettings
from wordle_engine.services.dictionary_service import Dictionary
from wordle_engine.services.game_service import initialize_game_service

WORDS = ["kalem", "bursa", "kitap"]


class TestWebSocketHandlers(unittest.TestCase):
    def setUp(self):
        self.service = initialize_game_service(Dictionary(WORDS), start_timers=False)
        self.app, self.socketio = create_app(TestingConfig)
        self.client = self.socketio.test_client(self.app)
        self.game_id = self.service.create_new_game(GameSettings(has_time_limit=True, time_limit_minutes=1))
        self.engine = self.service.get_engine(self.game_id)
        self.engine.target_word = "KALEM"

    def tearDown(self):
        self.client.disconnect()
        self.service.shutdown()

    def received(self, name):
        return [message['args'][0] for message in self.client.get_received() if message['name'] == name]

    def test_join_game_sends_state(self):
        self.client.emit('join_game', {'game_id': self.game_id})
        updates = self.received('game_state_update')
        self.assertEqual(len(updates), 1)
        self.assertEqual(updates[0]['event'], 'joined')
        self.assertEqual(updates[0]['state']['remaining_seconds'], 60)

    def test_missing_or_unknown_game(self):
        self.client.emit('join_game', {})
        errors = self.received('error')
        self.assertEqual(errors[0]['error'], 'Game ID is required')

        self.client.emit('add_letter', {'game_id': 'missing', 'letter': 'a'})
        errors = self.received('error')
        self.assertEqual(errors[0]['error'], 'Game not found')

    def test_key_presses_broadcast_state(self):
        self.client.emit('join_game', {'game_id': self.game_id})
        self.client.get_received()

        self.client.emit('add_letter', {'game_id': self.game_id, 'letter': 'k'})
        self.client.emit('remove_letter', {'game_id': self.game_id})
        events = [update['event'] for update in self.received('game_state_update')]
        self.assertEqual(events, ['letter_added', 'letter_removed'])

    def test_submit_guess_ends_game(self):
        self.client.emit('join_game', {'game_id': self.game_id})
        for letter in "kalem":
            self.client.emit('add_letter', {'game_id': self.game_id, 'letter': letter})
        self.client.get_received()

        self.client.emit('submit_guess', {'game_id': self.game_id})
        messages = self.client.get_received()
        names = [message['name'] for message in messages]
        self.assertIn('game_ended', names)
        ended = [m['args'][0] for m in messages if m['name'] == 'game_ended'][0]
        self.assertEqual(ended['result'], 'won')
        self.assertEqual(ended['target_word'], 'KALEM')

    def test_invalid_word_then_acknowledge(self):
        self.client.emit('join_game', {'game_id': self.game_id})
        for letter in "xyzqw":
            self.client.emit('add_letter', {'game_id': self.game_id, 'letter': letter})
        self.client.emit('submit_guess', {'game_id': self.game_id})
        self.client.emit('acknowledge', {'game_id': self.game_id, 'signal': 'invalid_word'})

        events = [update['event'] for update in self.received('game_state_update')]
        self.assertIn('invalid_word', events)
        self.assertEqual(events[-1], 'signal_cleared')

    def test_time_expiry_is_pushed(self):
        self.client.emit('join_game', {'game_id': self.game_id})
        self.client.get_received()

        self.engine.remaining_seconds = 1
        self.engine.tick()

        messages = self.client.get_received()
        names = [message['name'] for message in messages]
        self.assertIn('time_expired', names)
        self.assertIn('game_ended', names)
        expired = [m['args'][0] for m in messages if m['name'] == 'time_expired'][0]
        self.assertEqual(expired['target_word'], 'KALEM')


if __name__ == '__main__':
    unittest.main()
