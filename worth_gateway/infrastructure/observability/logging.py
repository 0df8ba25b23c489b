"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from worth_gateway.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_series_request(
    request_id: str,
    kind: str,
    points: int,
    duration_ms: float,
    demo: bool,
) -> None:
    """Log one served balance-series request"""
    logging.info(
        "Series served",
        extra={
            "request_id": request_id,
            "step": "series_complete",
            "series_kind": kind,
            "points": points,
            "duration_ms": duration_ms,
            "demo_mode": demo,
        },
    )


def log_http_request(request_id: str, method: str, route: str, status: int, duration_ms: float) -> None:
    """One access log record per HTTP request"""
    logging.info(
        "Request handled",
        extra={
            "request_id": request_id,
            "method": method,
            "route": route,
            "status": status,
            "duration_ms": duration_ms,
        },
    )
