from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, error_response
from ..common.validators import require_max_length, require_non_empty
from ..container import Container
from ..core.exceptions import DomainError, InvalidTransitionError
from .session import ScanSession, idle_snapshot

MAX_OPERATOR_ID_LENGTH = 64


def register(app: Flask, container: Container) -> None:
    def _operator(operator_id: str) -> str:
        operator_id = require_non_empty(operator_id, "Operator id")
        require_max_length(operator_id, "Operator id", MAX_OPERATOR_ID_LENGTH)
        return operator_id

    def _session(operator_id: str) -> ScanSession:
        operator_id = _operator(operator_id)
        session = container.sessions.find(operator_id)
        if session is None:
            raise InvalidTransitionError(f"Scanner of operator {operator_id} is not started")
        return session

    def _ok(session: ScanSession, **extra):
        body = {"success": True}
        body.update(session.snapshot())
        body.update(extra)
        return jsonify(body), 200

    @app.route("/api/operators/<operator_id>/scan", methods=["GET"], endpoint="scan_state")
    @api_errors
    def scan_state(operator_id: str):
        operator_id = _operator(operator_id)
        session = container.sessions.find(operator_id)
        if session is None:
            return jsonify({"success": True, **idle_snapshot(operator_id), "events": []}), 200
        after = request.args.get("after", default=0, type=int)
        return _ok(session, events=[e.to_dict() for e in session.events_after(after)])

    @app.route("/api/operators/<operator_id>/scan/start", methods=["POST"], endpoint="scan_start")
    @api_errors
    def scan_start(operator_id: str):
        session = container.sessions.open(_operator(operator_id))
        session.start_scan()
        return _ok(session)

    @app.route("/api/operators/<operator_id>/scan/stop", methods=["POST"], endpoint="scan_stop")
    @api_errors
    def scan_stop(operator_id: str):
        operator_id = _operator(operator_id)
        session = container.sessions.find(operator_id)
        if session is None:
            return jsonify({"success": True, **idle_snapshot(operator_id)}), 200
        session.stop_scan()
        return _ok(session)

    @app.route("/api/operators/<operator_id>/scan/token", methods=["POST"], endpoint="scan_token")
    @api_errors
    def scan_token(operator_id: str):
        session = _session(operator_id)
        data = request.get_json(silent=True) or {}
        token = data.get("token", "")

        try:
            candidate = session.submit_token(token if isinstance(token, str) else "")
        except DomainError as e:
            return error_response(e, state=session.snapshot())

        if candidate is None:
            return _ok(session, ignored=True)
        return _ok(session, ignored=False)

    @app.route("/api/operators/<operator_id>/scan/confirm", methods=["POST"], endpoint="scan_confirm")
    @api_errors
    def scan_confirm(operator_id: str):
        session = _session(operator_id)
        try:
            record = session.confirm()
        except DomainError as e:
            return error_response(e, state=session.snapshot())
        return _ok(session, record=record.to_dict(), message=f"Attendance recorded: {record.status.value}")

    @app.route("/api/operators/<operator_id>/scan/cancel", methods=["POST"], endpoint="scan_cancel")
    @api_errors
    def scan_cancel(operator_id: str):
        session = _session(operator_id)
        session.cancel()
        return _ok(session)
