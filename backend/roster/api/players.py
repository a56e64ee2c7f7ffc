from flask import Blueprint, jsonify, request, abort

from roster.realtime import broadcast_player_change
from roster.schemas import CreatePlayerRequest, UpdatePlayerRequest, unwrap
from roster.services import players as svc


players = Blueprint('players', __name__)


@players.route('', methods=['GET'])
def list_players():
    return jsonify({'players': [p.to_dict() for p in svc.list_players()]})


@players.route('', methods=['POST'])
def create_player():
    body = unwrap(CreatePlayerRequest.parse(request.get_json(silent=True)))
    player = svc.create_player(body.name, body.rank, body.level)
    payload = player.to_dict()
    broadcast_player_change('INSERT', new=payload)
    return jsonify({'player': payload}), 201


@players.route('/<int:player_id>', methods=['PATCH'])
def update_player(player_id):
    # Validate before touching the store
    body = unwrap(UpdatePlayerRequest.parse(request.get_json(silent=True)))
    player = svc.get_player(player_id)
    if not player:
        abort(404, description='Player not found')
    before = player.to_dict()
    player = svc.update_player(player, body.changes)
    payload = player.to_dict()
    broadcast_player_change('UPDATE', new=payload, old=before)
    return jsonify({'player': payload})
