# src/quickcheck/adapters/logging_utils.py
import json
import logging
import math
import sys
import time
from typing import Any, Dict

from .config import config


def _json_safe(value: Any) -> Any:
    # screening ratios can be NaN/inf; strict JSON cannot carry them
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # attach contextual info if provided
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: _json_safe(v) for k, v in ctx.items()})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, allow_nan=False)


def with_context(**fields: Any) -> Dict[str, Dict[str, Any]]:
    """Build the `extra=` argument: logger.info("msg", extra=with_context(deal_id=1))."""
    return {"context": fields}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger
