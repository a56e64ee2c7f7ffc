"""Read-only query shapes. Every score row comes back with its player joined."""
from typing import Iterable, List, Optional

from sqlalchemy.orm import joinedload

from roster.errors import store_errors
from roster.models import VsStageStat


def _stats_with_player():
    return VsStageStat.query.options(joinedload(VsStageStat.player))


def list_scores_by_week_and_stage(week_id: int, stage_id: int) -> List[VsStageStat]:
    with store_errors():
        return (
            _stats_with_player()
            .filter(VsStageStat.week_id == week_id, VsStageStat.stage_id == stage_id)
            .order_by(VsStageStat.score.desc())
            .all()
        )


def list_scores_by_week(week_id: int) -> List[VsStageStat]:
    with store_errors():
        return _stats_with_player().filter(VsStageStat.week_id == week_id).all()


def list_scores_trend(week_ids: Iterable[int], stage_id: Optional[int] = None) -> List[VsStageStat]:
    """Rows for any of ``week_ids``, optionally narrowed to one stage."""
    week_ids = list(week_ids)
    if not week_ids:
        return []
    query = _stats_with_player().filter(VsStageStat.week_id.in_(week_ids))
    if stage_id is not None:
        query = query.filter(VsStageStat.stage_id == stage_id)
    with store_errors():
        return query.all()
