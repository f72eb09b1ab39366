"""
JSON Snapshot File

Whole-file JSON storage. Every save rewrites the full document through a temp file +
rename, so a crash mid-write leaves the previous snapshot intact and a retried save is
always safe.
"""

import os
from pathlib import Path
from typing import Any

import orjson

from src.platform.exception.exceptions import PersistenceUnavailableError
from src.platform.logging.loguru_io import Logger


class CorruptSnapshotError(Exception):
    pass


class JsonSnapshotFile:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Any:
        """
        Returns:
            Decoded document, or None when the file is missing or blank

        Raises:
            CorruptSnapshotError: File exists but is not valid JSON, or cannot be read
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CorruptSnapshotError(f'Cannot read {self.path}: {e}') from e

        if not raw.strip():
            return None

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise CorruptSnapshotError(f'Invalid JSON in {self.path}: {e}') from e

    def write(self, document: Any) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(orjson.dumps(document, option=orjson.OPT_INDENT_2))
            os.replace(tmp_path, self.path)
        except (OSError, TypeError) as e:
            Logger.base.error(f'❌ [PERSIST] Failed to write {self.path}: {e}')
            raise PersistenceUnavailableError(f'Cannot save {self.path.name}: {e}') from e
