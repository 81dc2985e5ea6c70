"""Structured JSON logging."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict

from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
    from precheck.models.address_registry import AddressRegistry
    from precheck.models.decision import Decision


# Process run ID for correlation across log entries
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(message)s")
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_decision(decision: "Decision", duration_ms: int) -> None:
    """Log structured per-hostname verification result.

    Args:
        decision: Verification outcome.
        duration_ms: Verification time in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Hostname verification completed",
        extra={**decision.to_json(), "duration_ms": duration_ms},
    )


def log_registry(registry: "AddressRegistry") -> None:
    """Log the address registry contents at startup."""
    logger = logging.getLogger(__name__)
    logger.info(
        "Address registry initialized",
        extra={"public_ips": registry.to_list(), "count": len(registry)},
    )
