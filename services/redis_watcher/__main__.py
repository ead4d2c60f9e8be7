from __future__ import annotations

import asyncio
import logging
import os
import sys

from libs.core.logging import configure_logging

from services.redis_watcher.app.config import load_settings
from services.redis_watcher.app.runner import run_forever

logger = logging.getLogger(__name__)


async def run_service() -> int:
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    watcher = settings.build_watcher()
    await run_forever(watcher, settings.interval)
    return 0


def main() -> None:
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    try:
        exit_code = asyncio.run(run_service())
    except KeyboardInterrupt:
        logger.info("Shutting down redis watcher due to keyboard interrupt")
        exit_code = 0
    except Exception:
        logger.exception("Fatal error in redis watcher")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
