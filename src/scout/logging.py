"""Structured logging configuration for Scout.

Provides JSON-formatted logs for production and human-readable
logs for development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_settings

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.funcName:
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable log formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging() -> None:
    """Configure logging based on settings."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # stderr keeps stdout clean for CLI JSON output
    handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = get_logger(__name__)
    logger.debug(
        "Logging initialized",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "log_format": settings.log_format,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        """Process the logging message and add extra context."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger with additional context.

    Args:
        name: Logger name
        **context: Context fields to add to all log messages

    Returns:
        Logger adapter with context

    Usage:
        logger = get_context_logger(__name__, layer="apollo")
        logger.info("Fetched organization")  # Includes layer
    """
    return LoggerAdapter(get_logger(name), context)


# =========================
# Convenience functions
# =========================


def log_merge_decision(
    lead_id: str,
    field: str,
    layer: str,
    action: str,
) -> None:
    """Log a per-field merge decision.

    Args:
        lead_id: Lead being merged
        field: Field name (phone, address, instagram, ...)
        layer: Supplemental layer label
        action: "filled", "kept" or "appended"
    """
    logger = get_logger("scout.merge")
    logger.debug(
        f"{layer}: {action} {field} on {lead_id}",
        extra={
            "lead_id": lead_id,
            "field": field,
            "layer": layer,
            "action": action,
            "event": "merge_decision",
        },
    )


def log_enrichment_result(
    source: str,
    target: str,
    success: bool,
    fields_found: int = 0,
    error: str | None = None,
) -> None:
    """Log the outcome of a collaborator lookup.

    Args:
        source: Collaborator name (apollo, scraper)
        target: Domain or URL looked up
        success: Whether any usable data came back
        fields_found: Number of populated fields returned
        error: Error description when the lookup failed
    """
    logger = get_logger("scout.enrichment")
    level = logging.INFO if success else logging.WARNING
    message = (
        f"{source} lookup for {target}: {fields_found} field(s)"
        if success
        else f"{source} lookup for {target} returned nothing"
    )
    logger.log(
        level,
        message,
        extra={
            "source": source,
            "target": target,
            "success": success,
            "fields_found": fields_found,
            "error": error,
            "event": "enrichment_result",
        },
    )


def log_verification_event(
    lead_id: str,
    from_status: str,
    to_status: str,
    corrected_fields: list[str] | None = None,
) -> None:
    """Log a verification status transition.

    Args:
        lead_id: Lead identifier
        from_status: Status before the transition
        to_status: Status after the transition
        corrected_fields: Fields overwritten by the correction pass
    """
    logger = get_logger("scout.verification")
    logger.info(
        f"Verification {from_status} -> {to_status} for {lead_id}",
        extra={
            "lead_id": lead_id,
            "from_status": from_status,
            "to_status": to_status,
            "corrected_fields": corrected_fields or [],
            "event": "verification_transition",
        },
    )
