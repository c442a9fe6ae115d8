"""
Structured logging system for creditfusion.

Provides centralized logging with console and optional file output,
log levels, and run metrics for monitoring how many extraction artifacts
actually contribute to each consensus.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for artifact loading and record matching.
    """

    def __init__(
        self,
        name: str = "creditfusion",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        # Counters are shared by every caller of get_logger()
        self._lock = threading.Lock()
        self.metrics = {
            "consensus_runs": 0,
            "artifacts_loaded": 0,
            "artifacts_rejected": 0,
            "rejections_by_reason": {},
            "records_matched": 0,
            "groups_formed": 0,
        }

        # Console output goes to stderr so stdout stays clean for JSON results
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"creditfusion_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_consensus_run(self):
        with self._lock:
            self.metrics["consensus_runs"] += 1

    def record_artifact_loaded(self):
        with self._lock:
            self.metrics["artifacts_loaded"] += 1

    def record_artifact_rejected(self, reason: str):
        """Record an artifact excluded from the contributing set."""
        with self._lock:
            self.metrics["artifacts_rejected"] += 1
            if reason not in self.metrics["rejections_by_reason"]:
                self.metrics["rejections_by_reason"][reason] = 0
            self.metrics["rejections_by_reason"][reason] += 1

    def record_matching(self, records: int, groups: int):
        with self._lock:
            self.metrics["records_matched"] += records
            self.metrics["groups_formed"] += groups

    def get_metrics(self) -> dict:
        """Return current metrics."""
        with self._lock:
            metrics_copy = dict(self.metrics)
            metrics_copy["rejections_by_reason"] = dict(self.metrics["rejections_by_reason"])
        attempted = metrics_copy["artifacts_loaded"] + metrics_copy["artifacts_rejected"]
        if attempted > 0:
            metrics_copy["acceptance_rate"] = round(
                metrics_copy["artifacts_loaded"] / attempted, 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        loaded = metrics["artifacts_loaded"]
        attempted = loaded + metrics["artifacts_rejected"]
        rate = round(metrics.get("acceptance_rate", 0) * 100, 1)

        self.info("=== Consensus Session Metrics ===")
        self.info(f"Consensus runs: {metrics['consensus_runs']}")
        self.info(f"Artifacts: {loaded}/{attempted} ({rate}% accepted)")
        self.info(f"Records matched: {metrics['records_matched']} into {metrics['groups_formed']} groups")

        if metrics["rejections_by_reason"]:
            self.info("Rejection reasons:")
            for reason, count in metrics["rejections_by_reason"].items():
                self.info(f"  {reason}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "creditfusion",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
