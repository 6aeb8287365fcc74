import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import structlog

from dog_rentals.db.engine import engine
from dog_rentals.logging_config import setup_logging
from dog_rentals.services.notifications import purge_expired_notifications

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """Delete notifications past their expiry (see NOTIFICATION_RETENTION_DAYS)."""
    try:
        deleted = purge_expired_notifications(engine)
        logger.info("notification_purge_finished", deleted=deleted)
    except Exception:
        logger.exception("notification_purge_failed")
        raise


if __name__ == "__main__":
    main()
