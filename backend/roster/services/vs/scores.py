from typing import Optional

from flask import current_app
from sqlalchemy.orm import joinedload

from roster import db
from roster.errors import ValidationError, store_errors
from roster.models import VsStageStat


def find_score(player_id: int, week_id: int, stage_id: int) -> Optional[VsStageStat]:
    """Natural-key lookup: at most one row per (player, week, stage)."""
    with store_errors():
        return (
            VsStageStat.query
            .filter_by(player_id=player_id, week_id=week_id, stage_id=stage_id)
            .order_by(VsStageStat.id.asc())
            .limit(1)
            .first()
        )


def _load_with_player(stat_id: int) -> VsStageStat:
    with store_errors():
        return (
            VsStageStat.query
            .options(joinedload(VsStageStat.player))
            .filter_by(id=stat_id)
            .one()
        )


def record_score(player_id: int, week_id: int, stage_id: int, score: float) -> VsStageStat:
    """Upsert the score for (player, week, stage).

    An existing row keeps its id and only has ``score`` overwritten; otherwise
    a new row is inserted. The returned row always has its player loaded.
    """
    if score is None or score < 0:
        raise ValidationError('Score must be a non-negative number')
    score = float(score)

    existing = find_score(player_id, week_id, stage_id)
    with store_errors():
        if existing:
            previous = existing.score
            existing.score = score
            db.session.add(existing)
            db.session.commit()
            stat_id = existing.id
            current_app.logger.info(
                f"[score-update] stat={stat_id} player={player_id} week={week_id} stage={stage_id} {previous} -> {score}"
            )
        else:
            stat = VsStageStat(player_id=player_id, week_id=week_id, stage_id=stage_id, score=score)
            db.session.add(stat)
            db.session.commit()
            stat_id = stat.id
            current_app.logger.info(
                f"[score-insert] stat={stat_id} player={player_id} week={week_id} stage={stage_id} score={score}"
            )
    return _load_with_player(stat_id)
