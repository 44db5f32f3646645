import threading
import time

from app.core.config import settings
from app.services import record_store, user_store
from app.services.logger import get_logger
from app.services.progress import WEEK_LABEL, compute_weekly_summary
from app.services.time_utils import local_tz, rolling_window_start

logger = get_logger(__name__)


def start_summary_worker():
    thread = threading.Thread(target=_run_worker, daemon=True)
    thread.start()
    return thread


def _run_worker():
    logger.info("Summary worker started (every %ss).", settings.SUMMARY_WORKER_INTERVAL_SECONDS)
    while True:
        try:
            refresh_weekly_summaries()
        except Exception:
            logger.exception("Error in summary worker run")

        time.sleep(settings.SUMMARY_WORKER_INTERVAL_SECONDS)


def refresh_weekly_summaries(db=None) -> int:
    """
    Recomputes the last-7-days summary of every active patient and stores it
    under weekly_summaries/{patientId}. Returns how many were written.
    """
    tz = local_tz()
    start = rolling_window_start(7)
    written = 0

    for patient in user_store.list_active_patients(db=db):
        uid = patient.user_id
        if not uid:
            continue

        try:
            exercise, doses, journal = record_store.fetch_summary_inputs(uid, start, db=db)
            summary = compute_weekly_summary(exercise, doses, journal, WEEK_LABEL, tz)
            record_store.save_weekly_summary(uid, summary, db=db)
            written += 1
        except Exception:
            logger.exception("Error refreshing weekly summary for %s", uid)

    return written
