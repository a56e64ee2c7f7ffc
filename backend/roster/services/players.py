from typing import List, Optional

from flask import current_app

from roster import db
from roster.errors import ValidationError, store_errors
from roster.models import Player

UPDATABLE_FIELDS = ('name', 'rank', 'level')


def list_players() -> List[Player]:
    with store_errors():
        return Player.query.order_by(Player.rank.asc().nulls_last(), Player.name.asc()).all()


def get_player(player_id: int) -> Optional[Player]:
    with store_errors():
        return db.session.get(Player, player_id)


def create_player(name: str, rank: int, level: int) -> Player:
    player = Player(name=name, rank=rank, level=level)
    with store_errors():
        db.session.add(player)
        db.session.commit()
    current_app.logger.info(f"[player-create] player={player.id} name={player.name!r} rank={rank} level={level}")
    return player


def update_player(player: Player, changes: dict) -> Player:
    """Apply a partial update. ``changes`` has already been validated."""
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown or not changes:
        raise ValidationError('No valid fields provided for update')

    with store_errors():
        for key, value in changes.items():
            setattr(player, key, value)
        db.session.add(player)
        db.session.commit()
    current_app.logger.info(f"[player-update] player={player.id} fields={sorted(changes)}")
    return player
