from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error_response, json_error, unexpected_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    def api_attendance_today():
        date_s = request.args.get("date")
        try:
            work_date = parse_iso_date(date_s) if date_s else None
        except ValueError:
            return json_error("date must be YYYY-MM-DD", 400)

        try:
            rows = container.attendance_service.list_for_date(work_date)
            return jsonify({"success": True, "records": [r.to_dict() for r in rows]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="loading attendance")
