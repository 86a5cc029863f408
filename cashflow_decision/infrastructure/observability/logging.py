"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from cashflow_decision.domain.models import DecisionReport


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "cashflow-decision"


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


def log_decision(request_id: str, report: DecisionReport, duration_ms: float) -> None:
    """Log structured decision outcome for analysis"""
    unsafe = [d for d in report.decisions if not d.verdict.safe]
    logging.info(
        "Decision completed",
        extra={
            "request_id": request_id,
            "step": "decision_complete",
            "outcome": "safe" if report.safe else "unsafe",
            "anchor_count": len(report.decisions),
            "unsafe_count": len(unsafe),
            "warning_codes": [w.code for w in report.warnings],
            "total_borrow": round(sum(r.borrow_amount for r in report.recommendations), 2),
            "duration_ms": duration_ms,
        },
    )
