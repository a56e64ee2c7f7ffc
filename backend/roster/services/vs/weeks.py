from datetime import date, timedelta
from typing import List, Optional

from flask import current_app

from roster import db
from roster.errors import store_errors
from roster.models import VsWeek


def current_week_start(today: Optional[date] = None) -> date:
    """Monday of the week containing ``today`` (server local date)."""
    today = today or date.today()
    return today - timedelta(days=today.weekday())


def find_week_by_start(start_date: date) -> Optional[VsWeek]:
    with store_errors():
        return VsWeek.query.filter_by(start_date=start_date).order_by(VsWeek.id.asc()).first()


def ensure_week(start_date: Optional[date] = None, end_date: Optional[date] = None) -> VsWeek:
    """Return the week starting on ``start_date``, creating it if absent.

    - ``start_date`` defaults to the Monday of the current week
    - An existing week is returned as-is; ``end_date`` is not updated
    - Lookup and insert are separate statements, so two concurrent callers
      may both insert unless the table enforces uniqueness
    """
    effective_start = start_date or current_week_start()

    existing = find_week_by_start(effective_start)
    if existing:
        current_app.logger.info(f"[week-reuse] week={existing.id} start={effective_start.isoformat()}")
        return existing

    week = VsWeek(start_date=effective_start, end_date=end_date)
    with store_errors():
        db.session.add(week)
        db.session.commit()
    current_app.logger.info(f"[week-create] week={week.id} start={effective_start.isoformat()} end={end_date}")
    return week


def list_weeks() -> List[VsWeek]:
    with store_errors():
        return VsWeek.query.order_by(VsWeek.start_date.desc()).all()
