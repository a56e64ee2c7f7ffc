"""Typed request structs parsed at the HTTP boundary.

Every ``parse`` returns ``Ok(request)`` or ``Err(ValidationError)``; routes
call :func:`unwrap` so the app-level error handler renders the 400.
"""
import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, List, Optional, TypeVar, Union

from roster.errors import ValidationError

T = TypeVar('T')

PLAYER_CREATE_RANK_RANGE = (1, 4)
PLAYER_UPDATE_RANK_RANGE = (1, 5)
PLAYER_LEVEL_RANGE = (1, 30)
# Integer columns (ids, stage numbers) are 32-bit in Postgres
STORE_INT_RANGE = (-2 ** 31, 2 ** 31 - 1)

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ValidationError


Result = Union[Ok[T], Err]


def unwrap(result: Result):
    if isinstance(result, Err):
        raise result.error
    return result.value


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def as_int(value: Any) -> Optional[int]:
    """Integral JSON number -> int, anything else -> None."""
    if not is_number(value):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        return int(value)
    return value


def as_id(value: Any) -> Optional[int]:
    """Positive integer id from a JSON number or a query-string value."""
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    value = as_int(value)
    if value is None or not 0 < value <= STORE_INT_RANGE[1]:
        return None
    return value


def as_score(value: Any) -> Optional[float]:
    """Finite non-negative JSON number -> float, anything else -> None."""
    if not is_number(value):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def in_range(value: Optional[int], bounds) -> bool:
    low, high = bounds
    return value is not None and low <= value <= high


def _parse_date(raw: Any, name: str) -> Result:
    if raw is None:
        return Ok(None)
    if isinstance(raw, str):
        # Accept a trailing time part, nothing else
        day = raw.strip().split("T", 1)[0]
        if _ISO_DATE.fullmatch(day):
            try:
                return Ok(date.fromisoformat(day))
            except ValueError:
                pass
    return Err(ValidationError(f'{name} must be an ISO date (YYYY-MM-DD)'))


@dataclass(frozen=True)
class CreatePlayerRequest:
    name: str
    rank: int
    level: int

    @classmethod
    def parse(cls, data: Any) -> Result:
        data = data if isinstance(data, dict) else {}
        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            return Err(ValidationError('Name is required'))

        rank = as_int(data.get('rank'))
        if not in_range(rank, PLAYER_CREATE_RANK_RANGE):
            return Err(ValidationError('Rank must be between 1 and 4'))

        level = as_int(data.get('level'))
        if not in_range(level, PLAYER_LEVEL_RANGE):
            return Err(ValidationError('Level must be between 1 and 30'))

        return Ok(cls(name=name.strip(), rank=rank, level=level))


@dataclass(frozen=True)
class UpdatePlayerRequest:
    """Partial update. ``changes`` only holds fields the caller supplied.

    rank/level may be explicitly cleared with null; a blank name is dropped.
    """
    changes: dict = field(default_factory=dict)

    @classmethod
    def parse(cls, data: Any) -> Result:
        data = data if isinstance(data, dict) else {}
        changes = {}

        name = data.get('name')
        if isinstance(name, str) and name.strip():
            changes['name'] = name.strip()

        if 'rank' in data:
            if data['rank'] is None:
                changes['rank'] = None
            else:
                rank = as_int(data['rank'])
                if not in_range(rank, PLAYER_UPDATE_RANK_RANGE):
                    return Err(ValidationError('Rank must be between 1 and 5'))
                changes['rank'] = rank

        if 'level' in data:
            if data['level'] is None:
                changes['level'] = None
            else:
                level = as_int(data['level'])
                if not in_range(level, PLAYER_LEVEL_RANGE):
                    return Err(ValidationError('Level must be between 1 and 30'))
                changes['level'] = level

        if not changes:
            return Err(ValidationError('No valid fields provided for update'))
        return Ok(cls(changes=changes))


@dataclass(frozen=True)
class CreateWeekRequest:
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def parse(cls, data: Any) -> Result:
        data = data if isinstance(data, dict) else {}
        start = _parse_date(data.get('startDate'), 'startDate')
        if isinstance(start, Err):
            return start
        end = _parse_date(data.get('endDate'), 'endDate')
        if isinstance(end, Err):
            return end
        return Ok(cls(start_date=start.value, end_date=end.value))


@dataclass(frozen=True)
class CreateStageRequest:
    stage_number: int
    stage_type: Optional[str] = None

    @classmethod
    def parse(cls, data: Any) -> Result:
        data = data if isinstance(data, dict) else {}
        stage_number = as_int(data.get('stageNumber'))
        if stage_number is None:
            return Err(ValidationError('Stage number is required'))
        if not in_range(stage_number, STORE_INT_RANGE):
            return Err(ValidationError('Stage number is out of range'))
        stage_type = data.get('stageType')
        if not isinstance(stage_type, str) or not stage_type.strip():
            stage_type = None
        return Ok(cls(stage_number=stage_number, stage_type=stage_type))


@dataclass(frozen=True)
class RecordScoreRequest:
    player_id: int
    week_id: int
    stage_id: int
    score: float

    @classmethod
    def parse(cls, data: Any) -> Result:
        data = data if isinstance(data, dict) else {}
        player_id = as_id(data.get('playerId'))
        week_id = as_id(data.get('weekId'))
        stage_id = as_id(data.get('stageId'))
        if player_id is None or week_id is None or stage_id is None:
            return Err(ValidationError('playerId, weekId and stageId are required'))

        score = as_score(data.get('score'))
        if score is None:
            return Err(ValidationError('Score must be a non-negative number'))

        return Ok(cls(player_id=player_id, week_id=week_id, stage_id=stage_id, score=score))


@dataclass(frozen=True)
class StatsQuery:
    week_id: int
    stage_id: int

    @classmethod
    def parse(cls, args) -> Result:
        week_id = as_id(args.get('weekId'))
        stage_id = as_id(args.get('stageId'))
        if week_id is None or stage_id is None:
            return Err(ValidationError('weekId and stageId are required'))
        return Ok(cls(week_id=week_id, stage_id=stage_id))


@dataclass(frozen=True)
class StatsByWeekQuery:
    week_id: int

    @classmethod
    def parse(cls, args) -> Result:
        week_id = as_id(args.get('weekId'))
        if week_id is None:
            return Err(ValidationError('weekId is required'))
        return Ok(cls(week_id=week_id))


@dataclass(frozen=True)
class StatsTrendQuery:
    week_ids: List[int]
    stage_id: Optional[int] = None

    @classmethod
    def parse(cls, args) -> Result:
        raw = args.get('weekIds') or ''
        parts = [part for part in raw.split(',') if part.strip()]
        if not parts:
            return Err(ValidationError('weekIds are required'))
        week_ids = [as_id(part) for part in parts]
        if any(week_id is None for week_id in week_ids):
            return Err(ValidationError('weekIds must be a comma-separated list of ids'))

        stage_id = None
        raw_stage = args.get('stageId')
        if raw_stage:
            stage_id = as_id(raw_stage)
            if stage_id is None:
                return Err(ValidationError('stageId must be an id'))
        return Ok(cls(week_ids=week_ids, stage_id=stage_id))
