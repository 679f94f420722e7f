"""JSON API for advent cycles, score submission and plan generation."""

from __future__ import annotations

from flask import Blueprint, jsonify, request, send_file
from loguru import logger

from expedition.presentation import report
from expedition.services import validation

from ...dao import cycles_dao, db, members_dao, profiles_dao
from ...services import plan_service

bp = Blueprint("advent", __name__, url_prefix="/api")


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@bp.errorhandler(validation.ValidationError)
def _validation_failed(exc: validation.ValidationError):
    logger.warning("Rejected payload", field=exc.field, reason=exc.message, path=request.path)
    return jsonify({"error": exc.message, "field": exc.field}), 400


@bp.errorhandler(cycles_dao.CycleNotFoundError)
def _cycle_missing(exc: cycles_dao.CycleNotFoundError):
    return _error(str(exc), 404)


@bp.errorhandler(members_dao.MemberNotFoundError)
def _member_missing(exc: members_dao.MemberNotFoundError):
    return _error(str(exc), 404)


@bp.errorhandler(profiles_dao.ProfileNotFoundError)
def _profile_missing(exc: profiles_dao.ProfileNotFoundError):
    return _error(str(exc), 404)


@bp.errorhandler(cycles_dao.ActiveCycleExistsError)
@bp.errorhandler(cycles_dao.CycleInProgressError)
def _cycle_conflict(exc: Exception):
    return _error(str(exc), 409)


@bp.errorhandler(db.DatabaseError)
def _database_failed(exc: db.DatabaseError):
    logger.error("Database error", error=str(exc), path=request.path)
    return _error("Database error", 500)


@bp.get("/guilds/<guild_id>/cycles")
def list_cycles(guild_id: str):
    limit = request.args.get("limit", default=20, type=int)
    return jsonify({"cycles": cycles_dao.list_cycles(guild_id, limit)})


@bp.post("/guilds/<guild_id>/cycles")
def create_cycle(guild_id: str):
    payload = request.get_json(silent=True) or {}
    data = validation.validate_cycle_create(payload)
    cycle = plan_service.create_cycle(guild_id, data)
    return jsonify(cycle), 201


@bp.get("/cycles/<cycle_id>")
def get_cycle(cycle_id: str):
    return jsonify(cycles_dao.ensure_cycle(cycle_id))


@bp.patch("/cycles/<cycle_id>")
def update_cycle(cycle_id: str):
    payload = request.get_json(silent=True) or {}
    values = validation.validate_cycle_update(payload)
    cycle = cycles_dao.ensure_cycle(cycle_id)
    start = values.get("start_date") or validation.parse_date(cycle["start_date"], "start_date")
    end = values.get("end_date") or validation.parse_date(cycle["end_date"], "end_date")
    validation.validate_window(start, end)
    return jsonify(cycles_dao.update_cycle(cycle_id, values))


@bp.delete("/cycles/<cycle_id>")
def delete_cycle(cycle_id: str):
    cycles_dao.delete_cycle(cycle_id)
    return jsonify({"status": "ok"})


@bp.post("/cycles/<cycle_id>/plan")
def generate_plan(cycle_id: str):
    payload = request.get_json(silent=True) or {}
    availability = validation.validate_availability(payload.get("member_availability"))
    try:
        result = plan_service.generate_plan(cycle_id, availability)
    except plan_service.PlanGenerationError as exc:
        return _error(str(exc), 400)
    return jsonify({"status": "ok", "plan": result.to_dict()})


@bp.get("/cycles/<cycle_id>/plan")
def get_plan(cycle_id: str):
    plan = plan_service.load_plan(cycle_id)
    if plan is None:
        return _error("Plan has not been generated yet", 404)
    return jsonify(plan.to_dict())


@bp.get("/cycles/<cycle_id>/plan.xlsx")
def export_plan(cycle_id: str):
    plan = plan_service.load_plan(cycle_id)
    if plan is None:
        return _error("Plan has not been generated yet", 404)
    stream = report.workbook_bytes(plan)
    return send_file(
        stream,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=f"advent_plan_{cycle_id}.xlsx",
    )


@bp.get("/guilds/<guild_id>/members")
def public_members(guild_id: str):
    return jsonify({"members": members_dao.list_public_members(guild_id)})


@bp.post("/guilds/<guild_id>/scores")
def submit_score(guild_id: str):
    payload = request.get_json(silent=True) or {}
    submission = validation.validate_submission(payload)
    profile = plan_service.submit_score(guild_id, submission)
    return jsonify(profile), 200


@bp.get("/guilds/<guild_id>/profiles")
def list_profiles(guild_id: str):
    cycle_id = request.args.get("cycle_id")
    return jsonify({"profiles": profiles_dao.list_profiles(guild_id, cycle_id)})


@bp.put("/guilds/<guild_id>/profiles")
def save_profile(guild_id: str):
    payload = request.get_json(silent=True) or {}
    data = validation.validate_profile(payload)
    return jsonify(plan_service.save_profile(guild_id, data))


@bp.put("/profiles/<profile_id>")
def update_profile(profile_id: str):
    payload = request.get_json(silent=True) or {}
    scores = validation.validate_profile_scores(payload)
    return jsonify(plan_service.update_profile_scores(profile_id, scores))


@bp.get("/guilds/<guild_id>/advent-stats")
def advent_stats(guild_id: str):
    cycle_id = request.args.get("cycle_id")
    return jsonify(plan_service.guild_stats(guild_id, cycle_id).to_dict())
