"""Client-side state containers.

Each container is created by the caller (typically once at application
start) and passed to whatever needs it. Every operation clears the error,
raises its busy flag, calls the API, records a readable message on any
failure and always lowers the flag again.
"""
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


def _message(exc: Exception, default: str) -> str:
    return str(exc) or default


def merge_by_id(rows: List[Dict], row: Dict, prepend: bool = True) -> List[Dict]:
    """Replace the row with the same id in place, or add it if missing."""
    index = next((i for i, existing in enumerate(rows) if existing.get('id') == row.get('id')), -1)
    if index == -1:
        return [row, *rows] if prepend else [*rows, row]
    rows[index] = row
    return rows


class PlayersStore:

    def __init__(self, api):
        self.api = api
        self.players: List[Dict] = []
        self.is_loading = False
        self.error_message: Optional[str] = None

    def fetch_players(self) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            self.players = self.api.list_players()
        except Exception as exc:
            logger.warning(f"[players] fetch failed: {exc}")
            self.error_message = _message(exc, 'Failed to load players')
            self.players = []
        finally:
            self.is_loading = False

    def add_player(self, name: str, level: int, rank: int) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            player = self.api.create_player(name=name, level=level, rank=rank)
            self.players.append(player)
        except Exception as exc:
            logger.warning(f"[players] add failed: {exc}")
            self.error_message = _message(exc, 'Failed to add player')
        finally:
            self.is_loading = False

    def update_player(self, player_id, **fields) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            player = self.api.update_player(player_id, **fields)
            self.players = merge_by_id(self.players, player, prepend=False)
        except Exception as exc:
            logger.warning(f"[players] update failed: {exc}")
            self.error_message = _message(exc, 'Failed to update player')
        finally:
            self.is_loading = False

    def apply_realtime_change(self, payload: Dict) -> None:
        """Fold a ``players_changed`` payload into the local list."""
        event_type = payload.get('eventType')
        if event_type == 'DELETE':
            gone = (payload.get('old') or {}).get('id')
            self.players = [p for p in self.players if p.get('id') != gone]
        elif payload.get('new'):
            self.players = merge_by_id(self.players, payload['new'], prepend=False)


class VsContext:
    """Weeks, stages and the current selection of each."""

    def __init__(self, api):
        self.api = api
        self.weeks: List[Dict] = []
        self.stages: List[Dict] = []
        self.selected_week_id = None
        self.selected_week_name: Optional[str] = None
        self.selected_stage_id = None
        self.selected_stage_name: Optional[str] = None
        self.is_loading = False
        self.error_message: Optional[str] = None

    def fetch_weeks(self) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            self.weeks = self.api.list_weeks()
        except Exception as exc:
            logger.warning(f"[vs] fetch weeks failed: {exc}")
            self.error_message = _message(exc, 'Failed to load weeks')
            self.weeks = []
        finally:
            self.is_loading = False

    def create_week(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            week = self.api.create_week(start_date=start_date, end_date=end_date)
            if not any(existing.get('id') == week['id'] for existing in self.weeks):
                self.weeks = [week, *self.weeks]
            self.selected_week_id = week['id']
        except Exception as exc:
            logger.warning(f"[vs] create week failed: {exc}")
            self.error_message = _message(exc, 'Failed to create week')
        finally:
            self.is_loading = False

    def fetch_stages(self) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            self.stages = self.api.list_stages()
        except Exception as exc:
            logger.warning(f"[vs] fetch stages failed: {exc}")
            self.error_message = _message(exc, 'Failed to load stages')
            self.stages = []
        finally:
            self.is_loading = False

    def select_week(self, week_id) -> None:
        self.selected_week_id = week_id
        week = next((w for w in self.weeks if w.get('id') == week_id), None)
        self.selected_week_name = week.get('start_date') if week else None

    def select_stage(self, stage_id) -> None:
        self.selected_stage_id = stage_id
        stage = next((s for s in self.stages if s.get('id') == stage_id), None)
        self.selected_stage_name = stage.get('stage_type') if stage else None


class VsStats:
    """Scores for one (week, stage), mirrored locally after each save."""

    def __init__(self, api):
        self.api = api
        self.stats: List[Dict] = []
        self.is_loading = False
        self.is_saving = False
        self.error_message: Optional[str] = None

    def fetch_stats(self, week_id, stage_id) -> None:
        try:
            self.is_loading = True
            self.error_message = None
            self.stats = self.api.list_stats(week_id, stage_id)
        except Exception as exc:
            logger.warning(f"[vs] fetch stats failed: {exc}")
            self.error_message = _message(exc, 'Failed to load stats')
            self.stats = []
        finally:
            self.is_loading = False

    def save_stat(self, player_id, week_id, stage_id, score) -> None:
        try:
            self.is_saving = True
            self.error_message = None
            stat = self.api.save_stat(player_id, week_id, stage_id, score)
            # Keyed by id: the server owns the natural-key match
            self.stats = merge_by_id(self.stats, stat, prepend=True)
        except Exception as exc:
            logger.warning(f"[vs] save stat failed: {exc}")
            self.error_message = _message(exc, 'Failed to save stat')
        finally:
            self.is_saving = False
