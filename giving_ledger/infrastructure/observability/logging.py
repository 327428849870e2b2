"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from giving_ledger.config import settings

QUIET_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
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

    # httpx logs every provider call at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_totals_recomputed(user_id: str, kind: str, total: float, giving_score: int | None) -> None:
    """Log the outcome of a running-totals recomputation"""
    logging.getLogger("giving_ledger.totals").info(
        "Running totals recomputed",
        extra={
            "user_id": user_id,
            "step": "totals_recomputed",
            "kind": kind,
            "total": total,
            "giving_score": giving_score,
        },
    )


def log_advice_fallback(operation: str, user_id: str, reason: str) -> None:
    """Log that the deterministic fallback replaced the advice provider"""
    logging.getLogger("giving_ledger.advice").warning(
        "Advice provider unavailable, using fallback",
        extra={
            "user_id": user_id,
            "step": "advice_fallback",
            "operation": operation,
            "reason": reason,
        },
    )
