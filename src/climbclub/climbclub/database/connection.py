from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    data_file: Path


class JsonFileConnection:
    """One JSON data file, shared per path inside the process.

    Note: Each transaction re-reads the file so edits made by hand are picked up.
    Writes replace the file atomically; across processes the last write wins.
    """

    _instances: dict[Path, "JsonFileConnection"] = {}
    _instances_lock = threading.Lock()

    def __init__(self, config: StoreConfig):
        self._path = Path(config.data_file)
        self.lock = threading.RLock()

    @classmethod
    def get_instance(cls, config: StoreConfig) -> "JsonFileConnection":
        key = Path(config.data_file).resolve()
        with cls._instances_lock:
            if key not in cls._instances:
                cls._instances[key] = JsonFileConnection(StoreConfig(data_file=key))
            return cls._instances[key]

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def ensure_directory(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self._path.parent}") from e

    def read(self) -> Optional[Any]:
        """Return the parsed document, or None when the file does not exist yet."""

        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {self._path}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt data file {self._path}") from e

    def write(self, data: Any) -> None:
        self.ensure_directory()
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise StorageError(f"Cannot write {self._path}") from e
        logger.debug("wrote %s", self._path)
