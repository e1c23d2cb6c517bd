"""Point d'entrée de HabitQuest : `python src/main.py` ou la commande `habitquest`."""

import logging
import sys
import time

from habitquest.exceptions.config import ConfigError
from habitquest.utils.logging import parse_log_level, setup_logging

log = logging.getLogger("habitquest")


def main() -> int:
    started_at = time.perf_counter()
    setup_logging()

    try:
        from habitquest import config
        from habitquest.app import app
    except ConfigError as e:
        log.error("❌ Configuration invalide: %s", e)
        return 1

    setup_logging(parse_log_level(config.LOG_LEVEL))
    app.main(started_at)
    return 0


if __name__ == "__main__":
    sys.exit(main())
