"""Attendance Dashboard package.

Feature modules (students, attendance, dashboard, reports, ...) sit on top of a
remote Record Store API. Controllers are a thin Flask layer; statistics live in
the pure ``stats`` engine.
"""
