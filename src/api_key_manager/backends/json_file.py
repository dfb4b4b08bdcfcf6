"""JSON file backed configuration store."""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..exceptions import StoreError


class JsonFileConfigStore:
    """ConfigStore persisting all entries in a single JSON object file."""

    def __init__(self, path: str | Path):
        """Initialize JsonFileConfigStore.

        Args:
            path: Location of the JSON file. Created on first write, along
                with any missing parent directories.
        """
        self.path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    def _read(self) -> dict[str, Any]:
        """Load the whole file, or an empty mapping when it doesn't exist yet."""
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text() or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Write atomically: temp file in the same directory, then rename."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as fh:
                    json.dump(data, fh, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"Cannot write {self.path}: {exc}") from exc

    def _update(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    async def get_global_data(self, key: str) -> Any:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_global_data(self, key: str, value: Any) -> None:
        async with self._lock:
            await asyncio.to_thread(self._update, key, value)
