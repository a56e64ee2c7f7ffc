from flask import Blueprint, jsonify, request

from roster.schemas import (
    CreateStageRequest,
    CreateWeekRequest,
    RecordScoreRequest,
    StatsByWeekQuery,
    StatsQuery,
    StatsTrendQuery,
    unwrap,
)
from roster.services.vs import projections, scores, stages, weeks


vs = Blueprint('vs', __name__)


@vs.route('/weeks', methods=['GET'])
def list_weeks():
    return jsonify({'weeks': [w.to_dict() for w in weeks.list_weeks()]})


@vs.route('/weeks', methods=['POST'])
def create_week():
    body = unwrap(CreateWeekRequest.parse(request.get_json(silent=True)))
    week = weeks.ensure_week(body.start_date, body.end_date)
    return jsonify({'week': week.to_dict()})


@vs.route('/stages', methods=['GET'])
def list_stages():
    return jsonify({'stages': [s.to_dict() for s in stages.list_stages()]})


@vs.route('/stages', methods=['POST'])
def create_stage():
    body = unwrap(CreateStageRequest.parse(request.get_json(silent=True)))
    stage = stages.create_stage(body.stage_number, body.stage_type)
    return jsonify({'stage': stage.to_dict()}), 201


@vs.route('/stats', methods=['GET'])
def list_stats():
    query = unwrap(StatsQuery.parse(request.args))
    rows = projections.list_scores_by_week_and_stage(query.week_id, query.stage_id)
    return jsonify({'stats': [r.to_dict() for r in rows]})


@vs.route('/stats-by-week', methods=['GET'])
def list_stats_by_week():
    query = unwrap(StatsByWeekQuery.parse(request.args))
    rows = projections.list_scores_by_week(query.week_id)
    return jsonify({'stats': [r.to_dict() for r in rows]})


@vs.route('/stats-trends', methods=['GET'])
def list_stats_trends():
    query = unwrap(StatsTrendQuery.parse(request.args))
    rows = projections.list_scores_trend(query.week_ids, query.stage_id)
    return jsonify({'stats': [r.to_dict() for r in rows]})


@vs.route('/stats', methods=['POST'])
def save_stat():
    body = unwrap(RecordScoreRequest.parse(request.get_json(silent=True)))
    stat = scores.record_score(body.player_id, body.week_id, body.stage_id, body.score)
    return jsonify({'stat': stat.to_dict()})
