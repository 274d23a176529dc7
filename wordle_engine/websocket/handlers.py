"""
WebSocket Event Handlers

Real-time play: clients join a game room, send key presses, and receive every
engine state change (including timer ticks) as it happens.
"""

import threading
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger

# game_id -> (engine, unsubscribe)
room_subscriptions = {}
_subscriptions_lock = threading.Lock()


def game_room(game_id: str) -> str:
    return f"game_{game_id}"


def _make_room_listener(socketio, game_id: str):
    """Forward engine events to everyone in the game's room."""
    room = game_room(game_id)

    def listener(event, snapshot):
        state = snapshot.to_dict()
        socketio.emit('game_state_update', {
            'game_id': game_id,
            'event': event,
            'state': state
        }, room=room)

        if event == 'time_expired':
            socketio.emit('time_expired', {'game_id': game_id, 'target_word': snapshot.target_word}, room=room)
            game_logger.log_game_event(game_id, 'time_expired', 'system', target_word=snapshot.target_word)

        if event in ('game_won', 'game_lost', 'time_expired'):
            socketio.emit('game_ended', {
                'game_id': game_id,
                'result': snapshot.result.value,
                'target_word': snapshot.target_word,
                'reason': event
            }, room=room)

    return listener


def subscribe_room(socketio, game_id: str, engine) -> None:
    """Attach the room broadcaster to an engine, once per engine."""
    with _subscriptions_lock:
        current = room_subscriptions.get(game_id)
        if current is not None and current[0] is engine:
            return
        if current is not None:
            current[1]()
        unsubscribe = engine.subscribe(_make_room_listener(socketio, game_id))
        room_subscriptions[game_id] = (engine, unsubscribe)


def unsubscribe_room(game_id: str) -> None:
    with _subscriptions_lock:
        current = room_subscriptions.pop(game_id, None)
    if current is not None:
        current[1]()


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def _enter(game_service, game_id):
        engine = game_service.get_engine(game_id)
        join_room(game_room(game_id))
        subscribe_room(socketio, game_id, engine)
        return engine

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None, game_id=None):
        """Join a game room and receive the current state."""
        engine = _enter(game_service, game_id)
        game_logger.log_user_action(request, 'join_game', game_id)
        emit('game_state_update', {
            'game_id': game_id,
            'event': 'joined',
            'state': engine.snapshot().to_dict()
        })

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None, game_id=None):
        """Leave a game room."""
        leave_room(game_room(game_id))
        emit('left_game', {'game_id': game_id})

    @socketio.on('add_letter')
    @websocket_game_required
    def handle_add_letter(data, game_service=None, game_id=None):
        letter = data.get('letter')
        if not isinstance(letter, str) or not letter:
            emit('error', {'error': 'Letter is required', 'game_id': game_id})
            return
        _enter(game_service, game_id).add_letter(letter)

    @socketio.on('remove_letter')
    @websocket_game_required
    def handle_remove_letter(data, game_service=None, game_id=None):
        _enter(game_service, game_id).remove_letter()

    @socketio.on('submit_guess')
    @websocket_game_required
    def handle_submit_guess(data, game_service=None, game_id=None):
        engine = _enter(game_service, game_id)
        game_logger.log_user_action(request, 'submit_guess', game_id)
        was_over = engine.game_over
        engine.submit_guess()
        state = engine.snapshot()
        if state.game_over and not was_over:
            event = 'game_won' if state.result.value == 'won' else 'game_lost'
            game_logger.log_game_event(game_id, event, request.remote_addr,
                                       rows_used=state.current_row + 1, target_word=state.target_word)

    @socketio.on('acknowledge')
    @websocket_game_required
    def handle_acknowledge(data, game_service=None, game_id=None):
        _enter(game_service, game_id)
        try:
            game_service.acknowledge(game_id, data.get('signal'))
        except ValueError as e:
            emit('error', {'error': str(e), 'game_id': game_id})
