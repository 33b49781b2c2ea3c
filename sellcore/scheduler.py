# sellcore/scheduler.py
import os
from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import OperationalError
from .crud import SqlStore
from .db import SessionLocal
from .services import ListingManager
from .utils import logger, retry

SWEEP_ENABLED = os.getenv("SWEEP_ENABLED", "1") == "1"
SWEEP_INTERVAL_MINUTES = int(os.getenv("SWEEP_INTERVAL_MINUTES", "15"))

@retry(OperationalError, tries=3, delay=2, backoff=2)
def sweep_expired_listings():
    db = SessionLocal()
    try:
        return ListingManager(SqlStore(db)).sweep_expirations()
    finally:
        db.close()

def run_sweep():
    try:
        count = sweep_expired_listings()
        logger.debug("Scheduled sweep expired %d listing(s)", count)
    except Exception as e:
        logger.exception("Scheduled sweep failed: %s", e)

scheduler = BackgroundScheduler()
scheduler.add_job(run_sweep, 'interval', minutes=SWEEP_INTERVAL_MINUTES, id="expire-listings")

def start():
    if not SWEEP_ENABLED:
        logger.info("Expiration sweep scheduler disabled")
        return
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started, sweeping every %d min", SWEEP_INTERVAL_MINUTES)

def shutdown():
    if scheduler.running:
        scheduler.shutdown(wait=False)
