"""Client-side token slot.

The client keeps at most one token, stored under a fixed slot name. The file
backend survives process restarts the way browser local storage survives a
page reload.
"""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TOKEN_SLOT = "jwt"


class TokenStorage(Protocol):
    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def remove(self) -> None: ...


class MemoryTokenStorage:
    """Token slot that lives as long as the object."""

    def __init__(self, token: str | None = None):
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None


class FileTokenStorage:
    """Token slot persisted as one key of a small JSON document."""

    def __init__(self, path: str | os.PathLike[str], slot: str = TOKEN_SLOT):
        self.path = Path(path)
        self.slot = slot

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        # Only the owner should be able to read a bearer token
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self.path)

    def get(self) -> str | None:
        value = self._load().get(self.slot)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        data = self._load()
        data[self.slot] = token
        self._save(data)

    def remove(self) -> None:
        data = self._load()
        if data.pop(self.slot, None) is not None:
            self._save(data)
