"""Habit JSON routes."""

from __future__ import annotations

from datetime import date

from flask import jsonify, request

from ... import get_app_context
from ...errors import HabitNotFound, PreconditionViolation
from ...services.dates import format_local_date, normalize_date, parse_local_date
from . import bp

HISTORY_DAYS = 30  # Default window for the calendar history endpoint


def _serialize(model) -> dict:
    return model.model_dump(mode="json")


def _json_body() -> dict:
    """The request JSON object, or an empty dict when no JSON was sent."""

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise PreconditionViolation("Request body must be a JSON object")
    return payload


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise PreconditionViolation(f"Query parameter {name!r} must be an integer") from exc


def _request_today() -> str:
    """The caller's local day, or the server's configured local day if omitted."""

    supplied = request.args.get("today") or _json_body().get("today")
    if supplied:
        return normalize_date(supplied)
    return get_app_context().today()


@bp.errorhandler(PreconditionViolation)
def _bad_date(exc: PreconditionViolation):
    return jsonify({"error": str(exc)}), 400


@bp.errorhandler(HabitNotFound)
def _missing_habit(exc: HabitNotFound):
    return jsonify({"error": str(exc)}), 404


@bp.get("/")
def list_habits():
    habits = get_app_context().habit_repo.list_all()
    return jsonify([_serialize(habit) for habit in habits])


@bp.post("/initialize")
def initialize_habits():
    """Seed the default habits when none exist yet."""

    habits = get_app_context().habit_repo.seed_defaults()
    return jsonify([_serialize(habit) for habit in habits])


@bp.get("/entries")
def entries_on_day():
    """Completion records across habits for one day (``?date=``, defaults to today)."""

    raw = request.args.get("date")
    day = normalize_date(raw) if raw is not None else _request_today()
    entries = get_app_context().habit_repo.list_entries_on(day)
    return jsonify([_serialize(entry) for entry in entries])


@bp.get("/summary")
def daily_summary():
    """Completed-vs-total counts for one day (``?date=``, defaults to today)."""

    raw = request.args.get("date")
    day = normalize_date(raw) if raw is not None else _request_today()
    return jsonify(get_app_context().habit_service.daily_summary(day).as_dict())


@bp.get("/calendar")
def month_calendar():
    """Combined month grid of every habit (``?year=&month=``, defaults to this month)."""

    current = parse_local_date(_request_today())
    year = _int_arg("year", current.year)
    month = _int_arg("month", current.month)
    days = get_app_context().habit_service.month_calendar(year, month)
    return jsonify({"year": year, "month": month, "days": days})


@bp.get("/<int:habit_id>/entries")
def habit_entries(habit_id: int):
    ctx = get_app_context()
    ctx.habit_service.require_habit(habit_id)
    return jsonify([_serialize(entry) for entry in ctx.habit_repo.list_entries(habit_id)])


@bp.get("/<int:habit_id>/streaks")
def habit_streaks(habit_id: int):
    result = get_app_context().habit_service.streaks_for(habit_id, _request_today())
    return jsonify(result.as_dict())


@bp.get("/<int:habit_id>/history")
def habit_history(habit_id: int):
    """Per-day completion flags; defaults to the last 30 days ending today."""

    end = request.args.get("end") or _request_today()
    start = request.args.get("start")
    if not start:
        last = parse_local_date(end)
        start = format_local_date(date.fromordinal(max(1, last.toordinal() - (HISTORY_DAYS - 1))))
    history = get_app_context().habit_service.history(habit_id, start, end)
    return jsonify(history)


@bp.post("/<int:habit_id>/complete")
def complete_habit(habit_id: int):
    payload = _json_body()
    today = _request_today()
    outcome = get_app_context().habit_service.mark_complete(
        habit_id,
        payload.get("date") or today,
        today=today,
        notes=payload.get("notes"),
    )
    status = 201 if outcome.applied else 409
    return jsonify(outcome.as_dict()), status


@bp.post("/<int:habit_id>/uncomplete")
def uncomplete_habit(habit_id: int):
    payload = _json_body()
    today = _request_today()
    outcome = get_app_context().habit_service.mark_incomplete(
        habit_id, payload.get("date") or today, today=today
    )
    body = outcome.as_dict()
    body["removed"] = outcome.applied
    return jsonify(body)
