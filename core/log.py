"""
Structured logging setup (structlog on top of stdlib logging).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def add_service_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every event with the top-level component (`auth`, `api`, ...)."""
    logger_name = event_dict.get("logger", "")
    if logger_name:
        event_dict["component"] = logger_name.split(".")[0]
    return event_dict


def configure_logging(env_name: str = "local", log_level: str = "info") -> None:
    """Configure structlog once per process; JSON everywhere except local dev."""
    renderer = (
        structlog.dev.ConsoleRenderer()
        if env_name == "local"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
