"""Structured JSON logging for check runs."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, TextIO

from pythonjsonlogger.json import JsonFormatter

from dnschecker.models.run_summary import RunSummary
from dnschecker.models.verdict import Verdict


# Run ID for correlating the log entries of one invocation
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter that adds run_id and standardized fields."""

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


def setup_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Logs go to stderr by default because stdout carries the check report.

    Args:
        verbose: Log at INFO instead of WARNING.
        stream: Output stream for the handler.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO if verbose else logging.WARNING)

    # Remove existing handlers to avoid duplicates on rerun
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(stream or sys.stderr)
    formatter = CustomJsonFormatter("%(message)s", timestamp=True)
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_line_check(domain: str, verdict: Verdict) -> None:
    """Log structured per-line check result.

    Args:
        domain: Base domain of the run.
        verdict: Verdict for the line.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Line checked",
        extra={
            "domain": domain,
            "config_line": verdict.line,
            "record_type": verdict.keyword,
            "query_name": verdict.query_name,
            "status": verdict.status.value,
            "matched_values": list(verdict.matched_values),
            "detail": verdict.detail,
        },
    )


def log_run_summary(domain: str, summary: RunSummary, duration_sec: float) -> None:
    """Log run completion summary.

    Args:
        domain: Base domain of the run.
        summary: Final counts.
        duration_sec: Wall-clock duration of the run in seconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Check completed",
        extra={
            "domain": domain,
            "ok": summary.ok,
            "error": summary.error,
            "untested": summary.untested,
            "duration_sec": duration_sec,
        },
    )
