# sborrowhub/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Runs the overdue sweep every OVERDUE_CHECK_MINUTES.
    - Skipped when SCHEDULER_ENABLED is off (tests).
    - Debug reloader runs two processes; only the real one schedules.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # late import avoids a cycle through the services
    from sborrowhub.tasks.overdue_check import run_overdue_sweep

    scheduler = BackgroundScheduler(timezone="UTC")
    minutes = int(app.config.get("OVERDUE_CHECK_MINUTES", 10))

    def _job_wrapper():
        try:
            run_overdue_sweep(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] overdue sweep error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_sweep",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Overdue sweep started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler
    atexit.register(lambda: scheduler.shutdown(wait=False))
    return scheduler
