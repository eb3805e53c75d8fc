from __future__ import annotations

import logging
import sys

import structlog

from .context import get_run_id


def _add_run_id(_: logging.Logger, __: str, event_dict: dict) -> dict:
    rid = get_run_id()
    if rid:
        event_dict["run_id"] = rid
    return event_dict


# Shared by structlog loggers and foreign (stdlib) records so both render alike.
_SHARED_PROCESSORS = [
    _add_run_id,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]

_QUIET_LOGGERS = ("botocore", "boto3", "urllib3")

_CONFIGURED = False


def configure_logging(*, level: str | int = "INFO") -> None:
    """
    Route structlog and stdlib records through one JSON handler on stdout.
    Safe to call more than once.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # botocore logs every request at DEBUG.
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str | None = None):
    return structlog.get_logger(name)
