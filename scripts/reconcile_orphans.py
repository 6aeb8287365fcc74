import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import structlog

from dog_rentals.db.engine import engine
from dog_rentals.logging_config import setup_logging
from dog_rentals.services.reconciler import reconcile_orphans

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Delete every pending rental request whose listing no longer exists.

    Pending-request reads already prune orphans for the user they serve; this
    sweep catches the ones nobody has looked at yet.
    """
    logger.info("orphan_sweep_started")

    try:
        removed = reconcile_orphans(engine)
        logger.info("orphan_sweep_finished", removed=removed)
    except Exception:
        logger.exception("orphan_sweep_failed")
        raise


if __name__ == "__main__":
    main()
