"""Example: use the service layer without Flask.

Loads the roster + record set from the configured Record Store and prints dashboard stats.
Needs a session token for the store in STORE_TOKEN.
"""

import importlib
import os

from config import get_settings_module

from src.attendance_dashboard.attendance_dashboard.container import build_container
from src.attendance_dashboard.attendance_dashboard.store.connection import bind_session_token


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(store_config=settings.STORE_CONFIG, auth_config=settings.AUTH_CONFIG)
    bind_session_token(os.getenv("STORE_TOKEN"))

    dashboard = container.dashboard_service
    snapshot = dashboard.refresh()
    stats = dashboard.stats(snapshot)
    print(f"students={stats.total_students} rate={stats.rate_display} today={stats.today_present}/{stats.today_absent}")
    for bucket in dashboard.series(7, snapshot):
        print(f"{bucket.label:>7}  P={bucket.present} A={bucket.absent} E={bucket.excused}")


if __name__ == "__main__":
    main()
