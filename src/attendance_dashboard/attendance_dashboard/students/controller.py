from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.web import api_view, login_required
from ..container import Container
from ..reports.export import student_report_pdf


def student_json(s) -> dict:
    return {
        "studentId": s.student_id,
        "name": s.name,
        "rollNo": s.roll_no,
        "classId": s.class_id,
        "parentName": s.parent_name,
        "parentPhone": s.parent_phone,
    }


def register(app: Flask, container: Container) -> None:
    students = container.student_service
    dashboard = container.dashboard_service

    def _generate_report(student_id: str):
        snapshot = dashboard.snapshot()
        return container.report_service.generate(
            student_id=student_id,
            students=snapshot.students,
            records=snapshot.records,
        )

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    @login_required
    @api_view
    def api_students():
        snapshot = dashboard.snapshot()
        found = students.search(request.args.get("q"), students=snapshot.students)
        return jsonify({"success": True, "students": [student_json(s) for s in found]})

    @app.route("/api/students", methods=["POST"], endpoint="api_add_student")
    @login_required
    @api_view
    def api_add_student():
        data = request.get_json(silent=True) or {}
        students.add_student(
            name=data.get("name", ""),
            roll_no=data.get("rollNo", ""),
            class_id=data.get("classId", ""),
            parent_name=data.get("parentName"),
            parent_phone=data.get("parentPhone"),
        )
        warning = dashboard.try_refresh()
        return jsonify({"success": True, "message": "Student added successfully.", "warning": warning}), 201

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="api_delete_student")
    @login_required
    @api_view
    def api_delete_student(student_id: str):
        students.delete_student(student_id)
        warning = dashboard.try_refresh()
        return jsonify({"success": True, "message": "Student deleted successfully.", "warning": warning})

    @app.route("/api/students/<student_id>/report", methods=["GET"], endpoint="api_student_report")
    @login_required
    @api_view
    def api_student_report(student_id: str):
        report = _generate_report(student_id)
        return jsonify({"success": True, "studentName": report.student_name, "content": report.content})

    @app.route("/api/students/<student_id>/report.pdf", methods=["GET"], endpoint="api_student_report_pdf")
    @login_required
    @api_view
    def api_student_report_pdf(student_id: str):
        report = _generate_report(student_id)
        return send_file(
            io.BytesIO(student_report_pdf(report.student_name, report.content)),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=f"attendance_report_{report.student_id}.pdf",
        )
