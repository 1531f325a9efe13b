"""
Logging Configuration

structlog renders every log line of the process, including records emitted
through plain `logging.getLogger(__name__)` by the adapters, SQLAlchemy and
httpx, so a refresh cycle reads as one consistent stream.

Log Output:
===========
Development (APP_ENV=development):
    2025-03-22T12:45:56Z [info     ] Catalog import written  [modrate.shared.services.catalog_importer] cycle_id=3f2a91c07b1e mods_inserted=12

Everything else (JSON lines):
    {"event": "Catalog import written", "cycle_id": "3f2a91c07b1e", "mods_inserted": 12, "level": "info", ...}

Cycle Context:
==============
    with cycle_context(cycle_id=cycle_id, mode="expiration"):
        logger.info("Refresh decision made")   # carries cycle_id and mode
    logger.info("Idle")                        # context gone again
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.typing import Processor

from modrate.config.settings import settings

# Chatty third-party loggers kept at WARNING unless LOG_LEVEL is DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite", "asyncio")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Route structlog and stdlib logging through one ProcessorFormatter.

    Args:
        level: Root level name (DEBUG, INFO, ...)
        json_logs: Emit JSON lines instead of the colored console format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    render_chain: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_logs:
        render_chain += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=render_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
        )

    structlog.configure(
        processors=_pre_chain()
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually `get_logger(__name__)`."""
    return structlog.get_logger(name)


@contextmanager
def cycle_context(**values: Any) -> Iterator[None]:
    """
    Bind key/values to every log line emitted inside the block.

    Values bound before entering are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield


configure_logging(settings.LOG_LEVEL, json_logs=not settings.is_development)

logger = get_logger("modrate")
