# core/state_store.py

"""
External key/value storage for the two things that outlive the process:
the serialized session record and the light/dark theme flag.

`StateStore` keeps values in memory; `FileStateStore` mirrors them to a
small JSON file so a restarted console can restore its session.
"""

import json
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from core.logging_config import logger


class StateStore:

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str):
        with self._lock:
            self._values[key] = value
            self._flush()

    def delete(self, key: str):
        with self._lock:
            if self._values.pop(key, None) is not None:
                self._flush()

    def _flush(self):
        pass


class FileStateStore(StateStore):

    def __init__(self, path: str):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"State file {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
