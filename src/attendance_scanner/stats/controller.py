from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_errors
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TREND_DAYS


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str):
        value = request.args.get(name)
        return parse_iso_date(value) if value else container.today()

    @app.route("/api/stats/daily", methods=["GET"], endpoint="stats_daily")
    @api_errors
    def stats_daily():
        aggregate = container.stats.get_daily_stats(_date_arg("date"))
        return jsonify({"success": True, "stats": aggregate.to_dict()}), 200

    @app.route("/api/stats/trend", methods=["GET"], endpoint="stats_trend")
    @api_errors
    def stats_trend():
        series = container.stats.get_trend(request.args.get("days", DEFAULT_TREND_DAYS), end=_date_arg("end"))
        return jsonify({"success": True, "days": series.to_list()}), 200

    @app.route("/api/persons/<person_id>/stats", methods=["GET"], endpoint="person_stats")
    @api_errors
    def person_stats(person_id: str):
        person = container.resolver.resolve(person_id)
        summary = container.stats.get_person_stats(
            person.person_id,
            limit=request.args.get("limit", DEFAULT_HISTORY_LIMIT),
        )
        return jsonify({"success": True, "person": person.to_dict(), "stats": summary.to_dict()}), 200
