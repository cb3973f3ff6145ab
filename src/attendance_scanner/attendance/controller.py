from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_errors
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_RECENT_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/recent", methods=["GET"], endpoint="attendance_recent")
    @api_errors
    def attendance_recent():
        date_s = request.args.get("date")
        work_date = parse_iso_date(date_s) if date_s else container.today()
        rows = container.attendance_service.recent_for_day(
            work_date,
            limit=request.args.get("limit", DEFAULT_RECENT_LIMIT),
        )
        return jsonify({"success": True, "date": work_date.strftime("%Y-%m-%d"), "rows": rows}), 200

    @app.route("/api/persons/<person_id>/history", methods=["GET"], endpoint="person_history")
    @api_errors
    def person_history(person_id: str):
        person = container.resolver.resolve(person_id)
        rows = container.attendance_service.get_history(
            person.person_id,
            limit=request.args.get("limit", DEFAULT_HISTORY_LIMIT),
        )
        return jsonify({"success": True, "person": person.to_dict(), "rows": rows}), 200
