from __future__ import annotations

import json
import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def json_log(logger: logging.Logger, level: str, event: str, **fields: Any) -> None:
    payload: dict[str, Any] = {"event": event}
    payload.update({k: v for k, v in fields.items() if v is not None})
    # query results may hold bytes or other non-JSON values
    message = json.dumps(payload, ensure_ascii=False, default=str)
    log_fn = getattr(logger, level.lower(), logger.info)
    log_fn(message)
