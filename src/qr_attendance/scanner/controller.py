from __future__ import annotations

import uuid

from flask import Flask, jsonify, render_template, request, session, url_for

from ..common.responses import domain_error_response, json_error, unexpected_error_response
from ..container import Container
from ..core.app_logger import get_logger
from ..core.enums import AttendanceType
from ..core.exceptions import DomainError
from .audio import QueuedAudioCue
from .decoder import decode_frame
from .session import ScanSession
from .state import Idle, state_to_dict

log = get_logger(__name__)

SCAN_KEY = "scan_key"


def register(app: Flask, container: Container) -> None:
    registry = container.scan_sessions

    def _scan_key() -> str:
        key = session.get(SCAN_KEY)
        if not key:
            key = uuid.uuid4().hex
            session[SCAN_KEY] = key
        return key

    def _current() -> ScanSession:
        return registry.get(_scan_key())

    def _payload(scan: ScanSession, **extra) -> dict:
        cue = scan.audio_cue
        beeps = cue.drain() if isinstance(cue, QueuedAudioCue) else 0
        body = {
            "success": True,
            "attendance_type": scan.selection.get().value,
            "scanned_result": scan.last_scanned,
            "state": state_to_dict(scan.state),
            "play_sound": url_for("static", filename=app.config["BEEP_SOUND"]) if beeps else None,
        }
        body.update(extra)
        return body

    def _idle_payload() -> dict:
        return {
            "success": True,
            "attendance_type": AttendanceType.TIME_IN.value,
            "scanned_result": None,
            "state": state_to_dict(Idle()),
            "play_sound": None,
        }

    @app.route("/scan", endpoint="scan_page")
    def scan_page():
        # Every page load starts over with an empty processed-code set
        scan = registry.open(_scan_key())
        return render_template(
            "scan.html",
            attendance_types=list(AttendanceType),
            selected=scan.selection.get(),
            beep_url=url_for("static", filename=app.config["BEEP_SOUND"]),
            active_page="scan",
        )

    @app.route("/api/scan/type", methods=["POST"], endpoint="api_scan_type")
    def api_scan_type():
        data = request.get_json(silent=True) or request.form
        try:
            scan = _current()
            scan.select_type(data.get("type", ""))
            return jsonify(_payload(scan))
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="changing attendance type")

    @app.route("/api/scan/decode", methods=["POST"], endpoint="api_scan_decode")
    def api_scan_decode():
        """Decode event posted by the camera page: {"code": "<payload>"}."""
        data = request.get_json(silent=True) or {}
        try:
            code = data.get("code")
            if code is not None:
                code = str(code).strip()

            scan = _current()
            outcome = scan.on_decode(code)
            return jsonify(_payload(scan, outcome=outcome.value))
        except Exception as e:
            return unexpected_error_response(e, action="handling scan")

    @app.route("/api/scan/frame", methods=["POST"], endpoint="api_scan_frame")
    def api_scan_frame():
        """Camera frame upload; decoded on the server, then handled like a decode event."""
        if "image" not in request.files:
            return json_error("Missing image file", 400)

        try:
            code = decode_frame(request.files["image"].stream)
            if code is None:
                log.info("frame upload held no readable QR code")
                return json_error("No QR code detected in image", 422)

            scan = _current()
            outcome = scan.on_decode(code)
            return jsonify(_payload(scan, outcome=outcome.value))
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="decoding frame")

    @app.route("/api/scan/state", methods=["GET"], endpoint="api_scan_state")
    def api_scan_state():
        key = session.get(SCAN_KEY)
        scan = registry.peek(key) if key else None
        if scan is None:
            return jsonify(_idle_payload())
        return jsonify(_payload(scan))

    @app.route("/api/scan/close", methods=["POST"], endpoint="api_scan_close")
    def api_scan_close():
        key = session.pop(SCAN_KEY, None)
        closed = registry.close(key) if key else False
        return jsonify({"success": True, "closed": closed})
