"""
Append-only JSON event logs for the Zobot chatbot.

Each log name maps to ``<directory>/<name>.json`` holding a JSON array of
``{"timestamp": ..., "payload": ...}`` records. Writes are best-effort:
failures are logged and never raised to the caller.
"""

import json
import logging
import threading
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class JsonLogWriter:
    """Best-effort append-only writer for named JSON logs."""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def append(self, name: str, payload: Any) -> bool:
        """
        Append one record to the named log.

        Returns:
            True if the record was written
        """
        record = {"timestamp": datetime.utcnow().isoformat(), "payload": payload}
        try:
            with self._locks[name]:
                path = self.path_for(name)
                records = self._read(path)
                records.append(record)
                self.directory.mkdir(parents=True, exist_ok=True)
                tmp_path = path.with_suffix(".tmp")
                tmp_path.write_text(
                    json.dumps(records, indent=2, ensure_ascii=False, default=str),
                    encoding="utf-8",
                )
                tmp_path.replace(path)
            return True
        except Exception:
            logger.exception(f"Failed to append to log '{name}'")
            return False

    def read(self, name: str) -> List[Dict[str, Any]]:
        """Read all records of a named log."""
        with self._locks[name]:
            return self._read(self.path_for(name))

    def _read(self, path: Path) -> List[Dict[str, Any]]:
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError:
            logger.warning(f"Corrupt log file {path}, starting a new array")
            return []
        return data if isinstance(data, list) else []
