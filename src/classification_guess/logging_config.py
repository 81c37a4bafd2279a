"""Logging setup for the classification guess stage.

structlog events are rendered by a stdlib handler so that records from
httpx and the hosting pipeline share one format: JSON lines when
ENVIRONMENT=production, a console layout otherwise. Output goes to stderr
by default since the command line tool writes the message to stdout.
"""

import logging
import sys
from typing import IO, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


APP_NAME = "classification-guess"
QUIET_LOGGERS = ("httpx", "httpcore")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def shared_processors(production: bool) -> list[Processor]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_app_context,
    ]
    if production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def build_renderer(production: bool, stream: IO[str]) -> Processor:
    if production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    stream: Optional[IO[str]] = None,
) -> None:
    """Route structlog through a single root handler.

    Args:
        log_level: Level name; unknown names fall back to INFO
        environment: "production" selects the JSON renderer
        stream: Destination, stderr when omitted

    Calling it again replaces the previous root handlers.
    """
    stream = stream or sys.stderr
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    production = environment.lower() == "production"
    processors = shared_processors(production)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                build_renderer(production, stream),
            ],
            foreign_pre_chain=processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        renderer="json" if production else "console",
    )
