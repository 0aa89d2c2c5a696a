from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import api_view, login_required
from ..core.constants import DEFAULT_SERIES_DAYS
from ..container import Container
from ..stats import engine


def stats_json(stats) -> dict:
    return {
        "totalStudents": stats.total_students,
        "totalRecords": stats.total_records,
        "presentCount": stats.present_count,
        "overallAttendanceRate": round(stats.overall_attendance_rate, 1),
        "todayPresent": stats.today_present,
        "todayAbsent": stats.today_absent,
    }


def bucket_json(b) -> dict:
    return {
        "date": b.date,
        "label": b.label,
        "Present": b.present,
        "Absent": b.absent,
        "Excused": b.excused,
        "Half Day": b.half_day,
    }


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @login_required
    @api_view
    def api_dashboard():
        days = request.args.get("days", type=int) or DEFAULT_SERIES_DAYS
        snapshot = dashboard.refresh() if request.args.get("refresh") else dashboard.snapshot()

        return jsonify(
            {
                "success": True,
                "stats": stats_json(dashboard.stats(snapshot)),
                "series": [bucket_json(b) for b in dashboard.series(days, snapshot)],
                "classIds": dashboard.class_ids(snapshot),
            }
        )

    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    @login_required
    @api_view
    def api_classes():
        return jsonify({"success": True, "classIds": dashboard.class_ids()})

    @app.route("/api/classes/<class_id>/stats", methods=["GET"], endpoint="api_class_stats")
    @login_required
    @api_view
    def api_class_stats(class_id: str):
        snapshot = dashboard.snapshot()
        cs = dashboard.class_stats(class_id, snapshot)

        days = request.args.get("days", type=int) or DEFAULT_SERIES_DAYS
        series = engine.daily_series(cs.records, today=container.clock.today(), window_days=days)
        return jsonify(
            {
                "success": True,
                "classId": cs.class_id,
                "totalStudents": cs.total_students,
                "totalRecords": cs.total_records,
                "overallAttendanceRate": round(cs.overall_attendance_rate, 1),
                "series": [bucket_json(b) for b in series],
            }
        )
