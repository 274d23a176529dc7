"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify, current_app
from ..config.game_settings import (
    ALLOWED_GUESS_LIMITS, ALLOWED_TIME_LIMITS, ALLOWED_WORD_LENGTHS, GameSettings
)
from ..services.game_service import DictionaryUnavailableError, get_game_service
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger
from ..websocket.handlers import unsubscribe_room

game_bp = Blueprint('game', __name__)


def _default_settings() -> GameSettings:
    cfg = current_app.config
    return GameSettings(
        word_length=cfg.get('DEFAULT_WORD_LENGTH', 5),
        guess_limit=cfg.get('DEFAULT_GUESS_LIMIT', 5),
        time_limit_minutes=cfg.get('DEFAULT_TIME_LIMIT_MINUTES', 3),
    )


def _log_outcome(game_id, state):
    """Log terminal transitions caused by a command."""
    if not state.game_over:
        return
    event = 'game_won' if state.result.value == 'won' else 'game_lost'
    game_logger.log_game_event(
        game_id, event, request.remote_addr,
        rows_used=state.current_row + 1, target_word=state.target_word
    )


@game_bp.route('/settings/options', methods=['GET'])
def settings_options():
    """Choices offered by the settings screen, plus the server defaults."""
    return jsonify({
        'success': True,
        'word_lengths': list(ALLOWED_WORD_LENGTHS),
        'guess_limits': list(ALLOWED_GUESS_LIMITS),
        'time_limits': list(ALLOWED_TIME_LIMITS),
        'defaults': _default_settings().to_dict()
    })


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        game_logger.log_user_action(request, 'new_game', settings=data)

        try:
            settings = GameSettings.from_dict(data, _default_settings())
        except ValueError as e:
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'new_game', False, error_response)
            return jsonify(error_response), 400

        try:
            game_id = game_service.create_new_game(settings)
        except DictionaryUnavailableError as e:
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'new_game', False, error_response)
            return jsonify(error_response), 503

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'settings': settings.to_dict(),
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=settings.word_length, guess_limit=settings.guess_limit
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game_service=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'state': state.to_dict()
        }
        game_logger.log_server_response(request, 'get_state', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
@require_game
def add_letter(game_id, game_service=None):
    """Type one letter into the current row."""
    try:
        data = request.get_json(silent=True) or {}
        letter = data.get('letter')
        if not isinstance(letter, str) or not letter:
            error_response = {
                'success': False,
                'error': 'Letter is required'
            }
            game_logger.log_server_response(request, 'add_letter', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'add_letter', game_id, letter=letter)
        state = game_service.add_letter(game_id, letter)
        return jsonify({'success': True, 'state': state.to_dict()})

    except Exception as e:
        game_logger.log_error(request, e, 'add_letter', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/letter', methods=['DELETE'])
@require_game
def remove_letter(game_id, game_service=None):
    """Delete the last letter of the current row."""
    try:
        game_logger.log_user_action(request, 'remove_letter', game_id)
        state = game_service.remove_letter(game_id)
        return jsonify({'success': True, 'state': state.to_dict()})

    except Exception as e:
        game_logger.log_error(request, e, 'remove_letter', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
def submit_guess(game_id, game_service=None):
    """Submit the current row for validation and evaluation."""
    try:
        before = game_service.get_game_state(game_id)
        guess = before.row_text(before.current_row)
        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        state = game_service.submit_guess(game_id)
        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=guess, invalid_word=state.invalid_word_submitted
        )
        if not before.game_over:
            _log_outcome(game_id, state)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/acknowledge', methods=['POST'])
@require_game
def acknowledge(game_id, game_service=None):
    """Clear a one-shot signal ('invalid_word' or 'time_expired') after display."""
    try:
        data = request.get_json(silent=True) or {}
        signal = data.get('signal')
        game_logger.log_user_action(request, 'acknowledge', game_id, signal=signal)

        try:
            state = game_service.acknowledge(game_id, signal)
        except ValueError as e:
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'acknowledge', False, error_response, game_id)
            return jsonify(error_response), 400

        return jsonify({'success': True, 'state': state.to_dict()})

    except Exception as e:
        game_logger.log_error(request, e, 'acknowledge', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session and stop its timer."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            unsubscribe_room(game_id)
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        response_data = {
            'status': 'healthy',
            'active_games': game_service.active_games if game_service else 0,
            'dictionary_words': len(game_service.dictionary) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
        }

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        return jsonify({'status': 'error', 'error': str(e)}), 500
