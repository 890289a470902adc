"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from loan_engine.config import settings


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


def log_calculation(request_id: str, kind: str, duration_ms: float, **fields: Any) -> None:
    """Log one completed calculation with its headline figures"""
    logging.info(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "step": "calculation_complete",
            "kind": kind,
            "duration_ms": duration_ms,
            **fields,
        },
    )


def log_assessment(
    request_id: str,
    approval_likely: bool,
    gross_debt_service_ratio: float,
    total_debt_service_ratio: float,
) -> None:
    """Log structured approval outcome for analysis"""
    logging.info(
        "Serviceability assessed",
        extra={
            "request_id": request_id,
            "step": "assessment_complete",
            "approval_outcome": "likely" if approval_likely else "unlikely",
            "gdsr": round(gross_debt_service_ratio, 2),
            "tdsr": round(total_debt_service_ratio, 2),
        },
    )
