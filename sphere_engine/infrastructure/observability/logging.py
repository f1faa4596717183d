"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from sphere_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_dashboard(
    request_id: str,
    source: str,
    transaction_count: int,
    safe_to_spend: float,
    clamped: bool,
    duration_ms: float,
) -> None:
    """Log one structured line per dashboard computation"""
    logging.info(
        "Dashboard computed",
        extra={
            "request_id": request_id,
            "step": "dashboard_complete",
            "source": source,  # request body | data source
            "transaction_count": transaction_count,
            "safe_to_spend": safe_to_spend,
            "safe_to_spend_clamped": clamped,
            "duration_ms": duration_ms,
        },
    )
