import json
import os
import threading
from typing import Any

from app.core.logging_config import logger


class LocalStorage:
    """
    Durable JSON key-value file used when no database is configured.

    Every read goes to disk so several stores sharing a path see each
    other's writes. Parse and write failures are logged and swallowed:
    reads fall back to the caller's default and writes report False. A file
    that does not parse is set aside as <path>.corrupt before anything else
    is written.
    """

    def __init__(self, path: str):
        self.path = path
        self.lock = threading.RLock()

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except OSError as e:
            logger.error(f"Error reading local storage {self.path}: {e}")
            return {}
        except ValueError as e:
            logger.error(f"Local storage {self.path} is not valid JSON: {e}")
            self._quarantine()
            return {}
        if not isinstance(data, dict):
            logger.error(f"Local storage {self.path} does not hold a JSON object")
            self._quarantine()
            return {}
        return data

    def _quarantine(self) -> None:
        """Move an unreadable file to <path>.corrupt so the next write cannot clobber it."""
        corrupt_path = f"{self.path}.corrupt"
        try:
            os.replace(self.path, corrupt_path)
            logger.warning(f"Moved unreadable local storage to {corrupt_path}")
        except OSError as e:
            logger.error(f"Could not move unreadable local storage {self.path}: {e}")

    def _dump(self, data: dict) -> bool:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, default=str)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving to local storage {self.path}: {e}")
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        with self.lock:
            data = self._load()
        return data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        with self.lock:
            data = self._load()
            data[key] = value
            return self._dump(data)

    def remove(self, key: str) -> bool:
        with self.lock:
            data = self._load()
            if key not in data:
                return True
            del data[key]
            return self._dump(data)
