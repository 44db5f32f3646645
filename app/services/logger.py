import json
import logging
from datetime import datetime

from app.core.config import settings

_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Returns a module logger. The root handler is installed once, with the
    level taken from LOG_LEVEL.
    """
    global _configured
    if not _configured:
        logging.basicConfig(
            level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        _configured = True
    return logging.getLogger(name)


_debug_logger = get_logger("rehab.debug")


def log_debug(event: str, data: dict):
    """
    Logs structured debug info if enabled.
    """
    if not settings.AI_DEBUG_MODE:
        return

    entry = {
        "timestamp": datetime.now().isoformat(),
        "event": event,
        "data": data,
    }

    _debug_logger.info(json.dumps(entry, indent=2, default=str))
