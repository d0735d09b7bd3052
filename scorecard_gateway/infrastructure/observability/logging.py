"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "scorecard-gateway"


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


def log_estimate(
    request_id: str,
    school_id: int,
    bracket: str,
    net_price: float,
    duration_ms: float,
) -> None:
    """Log structured estimate outcome for analysis"""
    logging.info(
        "Estimate completed",
        extra={
            "request_id": request_id,
            "school_id": school_id,
            "step": "estimate_complete",
            "bracket": bracket,
            "net_price": net_price,
            "duration_ms": duration_ms,
        },
    )


def log_upstream_call(params: Dict[str, str], status: int | str, duration_ms: float) -> None:
    """Log a Scorecard API call; the API key is never included"""
    logging.info(
        "Scorecard query",
        extra={
            "step": "upstream_query",
            "params": {k: v for k, v in params.items() if k != "api_key"},
            "status": status,
            "duration_ms": duration_ms,
        },
    )
