# ============================================================================
# src/prescription_intelligence/utils/logging.py
# ============================================================================
"""
Logging setup for prescription scans.

Extraction code attaches scan fields through ``extra=`` (which strategy
ran, why a strategy fell back, how many medications came out). Both
formatters below render those fields, so a fallback reads the same in a
terminal and in a JSON log pipeline.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json


# Fields extraction code may pass via extra=, in render order
SCAN_FIELDS = ("strategy", "source", "reason", "medications", "interactions", "backend")


def scan_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Scan fields present on a record, in SCAN_FIELDS order."""
    return {
        name: getattr(record, name)
        for name in SCAN_FIELDS
        if getattr(record, name, None) is not None
    }


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Configure root logging for a scan run.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file that receives the same records
        format_json: One JSON object per line instead of text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_json else ScanTextFormatter()

    # stderr keeps stdout clean for CLI JSON output
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


class ScanTextFormatter(logging.Formatter):
    """Plain text lines with scan fields appended as key=value."""

    def __init__(self):
        super().__init__(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = scan_fields(record)
        if not fields:
            return line
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        # Traceback, if any, stays on the lines after the first
        head, sep, tail = line.partition("\n")
        return f"{head} [{rendered}]{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; scan fields go under "scan"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        fields = scan_fields(record)
        if fields:
            log_data['scan'] = fields

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)
