from flask import current_app
from flask_socketio import join_room, leave_room, emit

from roster import socketio

NAMESPACE = '/ws'
PLAYERS_ROOM = 'players'
PLAYERS_CHANGED = 'players_changed'


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_subscribe_players(data=None):
    join_room(PLAYERS_ROOM)
    emit('subscribed', {'room': PLAYERS_ROOM})


def handle_unsubscribe_players(data=None):
    leave_room(PLAYERS_ROOM)
    emit('unsubscribed', {'room': PLAYERS_ROOM})


def handle_ping(data):
    emit('pong', data or {})


def change_payload(event_type: str, new=None, old=None) -> dict:
    return {
        'eventType': event_type,
        'table': 'players',
        'new': new,
        'old': old,
    }


def broadcast_player_change(event_type: str, new=None, old=None) -> None:
    """Notify every socket in the players room of a committed change."""
    if not current_app.config.get('REALTIME_ENABLED', True):
        return
    player_id = (new or old or {}).get('id')
    current_app.logger.info(f"[realtime] {event_type} player={player_id}")
    socketio.emit(PLAYERS_CHANGED, change_payload(event_type, new, old), to=PLAYERS_ROOM, namespace=NAMESPACE)


def register_socketio_handlers() -> None:
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('subscribe_players', handle_subscribe_players, namespace=NAMESPACE)
    socketio.on_event('unsubscribe_players', handle_unsubscribe_players, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
