from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.web import api_view, json_error, login_required
from ..container import Container
from ..core.enums import AttendanceStatus
from ..reports import export
from ..stats.engine import enrich_records
from .model import AttendanceFilters

EXPORTS = {
    "pdf": (export.attendance_history_pdf, "application/pdf"),
    "xlsx": (
        export.attendance_history_xlsx,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ),
    "csv": (export.attendance_history_csv, "text/csv"),
}


def record_json(r) -> dict:
    return {
        "attendanceId": r.attendance_id,
        "studentId": r.student_id,
        "date": r.date,
        "status": r.status.value,
        "name": r.name,
        "rollNo": r.roll_no,
        "classId": r.class_id,
    }


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    dashboard = container.dashboard_service

    def _filters() -> AttendanceFilters:
        return AttendanceFilters(
            student_id=request.args.get("studentId") or None,
            date=request.args.get("date") or None,
            class_id=request.args.get("classId") or None,
        )

    def _history():
        """Records matching the query filters, joined against the current roster."""
        snapshot = dashboard.snapshot()
        filters = _filters()
        records = snapshot.records if filters.is_empty() else attendance.list_records(filters)
        return enrich_records(snapshot.students, records)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @login_required
    @api_view
    def api_attendance():
        return jsonify({"success": True, "records": [record_json(r) for r in _history()]})

    @app.route("/api/attendance", methods=["POST"], endpoint="api_mark_attendance")
    @login_required
    @api_view
    def api_mark_attendance():
        data = request.get_json(silent=True) or {}
        attendance.mark(
            student_id=data.get("studentId", ""),
            date=data.get("date", ""),
            status=data.get("status", ""),
            known_records=dashboard.snapshot().records,
        )
        warning = dashboard.try_refresh()
        return jsonify({"success": True, "message": "Attendance marked successfully.", "warning": warning}), 201

    @app.route("/api/attendance/class", methods=["POST"], endpoint="api_mark_class_attendance")
    @login_required
    @api_view
    def api_mark_class_attendance():
        data = request.get_json(silent=True) or {}
        snapshot = dashboard.snapshot()
        default_status = data.get("defaultStatus") or AttendanceStatus.PRESENT.value

        result = attendance.mark_class(
            class_id=data.get("classId", ""),
            date=data.get("date", ""),
            students=snapshot.students,
            known_records=snapshot.records,
            statuses=data.get("statuses") or {},
            default_status=default_status,
        )
        warning = dashboard.try_refresh()

        body = {
            "success": result.all_ok,
            "message": result.summary(),
            "succeeded": result.succeeded,
            "failed": [{"studentId": o.student_id, "message": o.message} for o in result.outcomes if not o.ok],
            "warning": warning,
        }
        # 207: some students were marked, some were not
        return jsonify(body), 200 if result.all_ok else 207

    @app.route("/api/attendance", methods=["DELETE"], endpoint="api_delete_attendance")
    @login_required
    @api_view
    def api_delete_attendance():
        data = request.get_json(silent=True) or {}
        attendance.delete(student_id=data.get("studentId", ""), date=data.get("date", ""))
        warning = dashboard.try_refresh()
        return jsonify({"success": True, "message": "Attendance record deleted successfully.", "warning": warning})

    @app.route("/api/attendance/export.<fmt>", methods=["GET"], endpoint="api_export_attendance")
    @login_required
    @api_view
    def api_export_attendance(fmt: str):
        if fmt not in EXPORTS:
            return json_error(f"Unsupported export format: {fmt}", 404)

        render, mimetype = EXPORTS[fmt]
        return send_file(
            io.BytesIO(render(_history())),
            mimetype=mimetype,
            as_attachment=True,
            download_name=f"attendance_history.{fmt}",
        )
