from datetime import datetime, timezone

from roster import db


def _utcnow():
    return datetime.now(timezone.utc)


def _number(value):
    """Whole scores serialise as ints, fractional ones as floats."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _iso(value):
    return value.isoformat() if value else None


class Player(db.Model):
    __tablename__ = 'players'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    rank = db.Column(db.Integer, nullable=True)   # 1-5, nullable after update
    level = db.Column(db.Integer, nullable=True)  # 1-30
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def identity(self):
        """Fields embedded into every score row."""
        return {
            'id': self.id,
            'name': self.name,
            'rank': self.rank,
            'level': self.level,
        }

    def to_dict(self):
        data = self.identity()
        data['created_at'] = _iso(self.created_at)
        return data


class VsWeek(db.Model):
    __tablename__ = 'vs_weeks'
    id = db.Column(db.Integer, primary_key=True)
    # Looked up by value; no unique constraint
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'start_date': _iso(self.start_date),
            'end_date': _iso(self.end_date),
            'created_at': _iso(self.created_at),
        }


class VsStage(db.Model):
    __tablename__ = 'vs_stages'
    id = db.Column(db.Integer, primary_key=True)
    stage_number = db.Column(db.Integer, nullable=False)
    stage_type = db.Column(db.String(64), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'stage_number': self.stage_number,
            'stage_type': self.stage_type,
        }


class VsStageStat(db.Model):
    __tablename__ = 'vs_stage_stats'
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False, index=True)
    week_id = db.Column(db.Integer, db.ForeignKey('vs_weeks.id'), nullable=False, index=True)
    stage_id = db.Column(db.Integer, db.ForeignKey('vs_stages.id'), nullable=False, index=True)
    score = db.Column(db.Float, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    player = db.relationship('Player')

    def to_dict(self):
        return {
            'id': self.id,
            'score': _number(self.score),
            'player_id': self.player_id,
            'week_id': self.week_id,
            'stage_id': self.stage_id,
            'player': self.player.identity() if self.player else None,
        }
