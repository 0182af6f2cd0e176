"""Structured logging configuration with redaction support."""

import logging
import sys
from typing import Any, Dict

import structlog

# Field names redacted when they contain any of these fragments
SENSITIVE_FRAGMENTS = ("api_key", "authorization", "secret", "password")

# Field names redacted only on an exact match (the provider's ``key`` query
# parameter)
SENSITIVE_NAMES = {"key"}

# Client libraries whose INFO records include full request URLs
QUIETED_LOGGERS = ("httpx", "httpcore", "openai")

# Event fields holding request data whose entries are checked individually
NESTED_FIELDS = ("params", "headers")

REDACTED = "REDACTED"


def is_sensitive(name: str) -> bool:
    """True when a field name holds a credential."""
    lowered = name.lower()
    return lowered in SENSITIVE_NAMES or any(f in lowered for f in SENSITIVE_FRAGMENTS)


def _redact_mapping(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: REDACTED if is_sensitive(k) else v for k, v in values.items()}


def redact_sensitive(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Redact credentials from log entries.

    Top-level fields are checked by name; ``params`` and ``headers`` dicts
    (provider query strings, outbound headers) are checked entry by entry.
    """
    for name in list(event_dict):
        if is_sensitive(name):
            event_dict[name] = REDACTED
        elif name in NESTED_FIELDS and isinstance(event_dict[name], dict):
            event_dict[name] = _redact_mapping(event_dict[name])
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON output with correlation ID support.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    # Request URLs carry the provider key in the query string
    for name in QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger
