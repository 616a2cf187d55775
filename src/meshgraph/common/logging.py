"""Structured logging using structlog.

Graph construction logs events with keyword context. Embedding services
call setup_logging once at startup to render them as JSON or console
output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from meshgraph.common.config import LoggingSettings, get_settings


def add_app_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag log entries with the application name and version."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("app_version", settings.app_version)
    return event_dict


def build_processors(settings: LoggingSettings) -> list[Processor]:
    """Build the structlog processor chain for the given settings.

    Args:
        settings: Logging settings.

    Returns:
        Processors ending with the JSON or console renderer.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if settings.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if settings.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ))

    if settings.format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return processors


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structured logging.

    Args:
        settings: Logging settings. Uses global settings if not provided.
    """
    if settings is None:
        settings = get_settings().logging

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.level),
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger, optionally bound to initial context.

    Example:
        logger = get_logger(__name__, graph_type="workload")
        logger.info("Traffic map built", nodes=42)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
