from __future__ import annotations

import io

from flask import Flask, jsonify, render_template, request, send_file

from ..common.responses import domain_error_response, unexpected_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    def _form() -> dict:
        data = request.get_json(silent=True) or request.form
        return {
            "name": data.get("name", ""),
            "email": data.get("email", ""),
            "qr_code": data.get("qr_code", ""),
            "contact": data.get("contact", ""),
        }

    @app.route("/students", endpoint="students_page")
    def students_page():
        try:
            students = roster.list_students()
            error = None
        except DomainError as e:
            students, error = [], str(e)
        return render_template("students.html", students=students, error=error, active_page="students")

    @app.route("/api/students", methods=["GET"], endpoint="api_list_students")
    def api_list_students():
        try:
            students = roster.list_students()
            return jsonify({"success": True, "students": [s.to_dict() for s in students]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="listing students")

    @app.route("/api/students", methods=["POST"], endpoint="api_add_student")
    def api_add_student():
        try:
            student = roster.add_student(**_form())
            return jsonify({"success": True, "student": student.to_dict()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="adding student")

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="api_get_student")
    def api_get_student(student_id: int):
        try:
            return jsonify({"success": True, "student": roster.get_student(student_id).to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="loading student")

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="api_update_student")
    def api_update_student(student_id: int):
        try:
            student = roster.update_student(student_id, **_form())
            return jsonify({"success": True, "student": student.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="updating student")

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="api_delete_student")
    def api_delete_student(student_id: int):
        try:
            roster.delete_student(student_id)
            return jsonify({"success": True})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="deleting student")

    @app.route("/students/<int:student_id>/qr.png", endpoint="student_qr_image")
    def student_qr_image(student_id: int):
        """Printable QR code for a student."""
        try:
            png = roster.qr_image(student_id)
            return send_file(io.BytesIO(png), mimetype="image/png")
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, action="generating QR code")
