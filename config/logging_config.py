import logging
import sys
from typing import Optional

import structlog

from config.settings import get_settings

# Request lines from these carry full API URLs; keep them out of INFO output.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _resolve_level(log_level: Optional[str]) -> int:
    level = getattr(logging, (log_level or get_settings().log_level).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(sort_keys=False),
    ]


def configure_logging(log_level: Optional[str] = None) -> None:
    """Route structlog and stdlib logging to stderr as JSON lines.

    stdout stays reserved for workflow commands such as ::error::.
    """
    level = _resolve_level(log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
