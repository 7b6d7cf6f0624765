from booster_logs.base import Logger
from datetime import datetime, timezone
from pathlib import Path
import json
import os


class FileLogger(Logger):
    """Appends JSON lines to <base_path>/<log_type>.log."""

    def __init__(self, log_type="booster", level="INFO", base_path=None):
        super().__init__(log_type=log_type, level=level)
        base_path = base_path or os.getenv("LOG_DIR", "logs")
        self.path = Path(base_path) / f"{log_type}.log"
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _write(self, level, msg, data):
        if not self.enabled(level):
            return
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "log_type": self.log_type,
            "level": level,
            "event": msg,
            **data
        }
        with open(self.path, "a") as f:
            # default=str keeps enums and paths from breaking a log line
            f.write(json.dumps(record, default=str) + "\n")

    def info(self, msg, **data):
        self._write("INFO", msg, data)

    def debug(self, msg, **data):
        self._write("DEBUG", msg, data)

    def warning(self, msg, **data):
        self._write("WARN", msg, data)

    def error(self, msg, **data):
        self._write("ERROR", msg, data)
