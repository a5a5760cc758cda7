"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

logger = logging.getLogger("cashflow90")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "cashflow90"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def log_tier_fallback(operation: str, company_id: str, tier: str) -> None:
    """Log that a resolution fell through to the next tier"""
    logger.info(
        "Tier returned nothing, falling through",
        extra={
            "operation": operation,
            "company_id": company_id,
            "step": "tier_fallback",
            "tier": tier,
        },
    )


def log_source_failure(operation: str, company_id: str, tier: str, error: Exception) -> None:
    """Log an upstream failure that was absorbed as an empty tier"""
    logger.warning(
        f"Source fetch failed: {error}",
        extra={
            "operation": operation,
            "company_id": company_id,
            "step": "source_failure",
            "tier": tier,
            "error_type": type(error).__name__,
        },
    )
