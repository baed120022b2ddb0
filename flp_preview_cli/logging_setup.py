"""JSONL logging for flp-preview.

Every record becomes one JSON object per line in a single log file, so runs
can be inspected with jq or grep. Configured through FLP_PREVIEW_LOG_PATH and
FLP_PREVIEW_LOG_LEVEL, or by the CLI's --log-file / --log-level options.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("FLP_PREVIEW_LOG_PATH", "./flp-preview.log.jsonl")
DEFAULT_LEVEL = os.environ.get("FLP_PREVIEW_LOG_LEVEL", "INFO").upper()

LOG_SCHEMA = {"name": "flp-preview.log", "ver": "1.0.0"}

# Attributes every LogRecord carries; anything else was passed via ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonlFormatter(logging.Formatter):
    """Formats a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": LOG_SCHEMA,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        extras = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}
        for key, value in extras.items():
            payload.setdefault(key, value)

        return json.dumps(payload, ensure_ascii=False, default=str)


class JsonlHandler(logging.FileHandler):
    """Appends JSONL records to ``path``, creating parent directories."""

    def __init__(self, path: str | Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(path, mode="a", encoding="utf-8", delay=True)
        self.setFormatter(JsonlFormatter())


def init_json_logging(path: str | None = None, level: str | None = None) -> None:
    """Install the JSONL sink on the root logger, replacing any earlier one."""
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))

    for handler in [h for h in root.handlers if isinstance(h, JsonlHandler)]:
        root.removeHandler(handler)
        handler.close()
    root.addHandler(JsonlHandler(path or DEFAULT_PATH))
