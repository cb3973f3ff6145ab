from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.http import api_errors
from ..container import Container
from ..core.constants import DEFAULT_SEARCH_LIMIT
from .badge import render_badge_png


def register(app: Flask, container: Container) -> None:
    @app.route("/api/persons", methods=["GET"], endpoint="persons_search")
    @api_errors
    def persons_search():
        persons = container.directory.search(
            term=request.args.get("q"),
            department=request.args.get("department"),
            limit=request.args.get("limit", DEFAULT_SEARCH_LIMIT),
        )
        return jsonify({"success": True, "persons": [p.to_dict() for p in persons]}), 200

    @app.route("/api/persons/<person_id>", methods=["GET"], endpoint="person_detail")
    @api_errors
    def person_detail(person_id: str):
        person = container.resolver.resolve(person_id)
        return jsonify({"success": True, "person": person.to_dict()}), 200

    @app.route("/api/persons/<person_id>/badge.png", methods=["GET"], endpoint="person_badge")
    @api_errors
    def person_badge(person_id: str):
        """Badge QR code encoding the person's scan token."""
        person = container.resolver.resolve(person_id)
        buf = io.BytesIO(render_badge_png(person.person_id))
        return send_file(buf, mimetype="image/png")
