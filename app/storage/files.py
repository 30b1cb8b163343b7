from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from . import paths

logger = logging.getLogger(__name__)


class VideoStore(Protocol):
    def exists(self) -> bool: ...

    def mkdir_all(self) -> None: ...

    def list(self) -> list[str]: ...

    def remove(self, name: str) -> None: ...

    def write(self, name: str, content: bytes) -> Path: ...


class LocalVideoStore:
    """Flat directory of uploaded videos, addressed by bare filename."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def exists(self) -> bool:
        return self.root.is_dir()

    def mkdir_all(self) -> None:
        paths.ensure_dir(self.root)

    def list(self) -> list[str]:
        return sorted(entry.name for entry in self.root.iterdir())

    def remove(self, name: str) -> None:
        (self.root / name).unlink()

    def write(self, name: str, content: bytes) -> Path:
        target = self.root / name
        with open(target, "wb") as f:
            f.write(content)
        return target


class CleanupMode(str, Enum):
    TOLERANT = "tolerant"
    STRICT = "strict"


def remove_file(store: VideoStore, name: str, mode: CleanupMode = CleanupMode.TOLERANT) -> bool:
    """Delete one stored file.

    In tolerant mode an OSError (usually a file that is already gone) is
    logged and reported as False. Strict mode lets it propagate.
    """
    try:
        store.remove(name)
    except OSError as exc:
        if mode is CleanupMode.STRICT:
            raise
        logger.info("Could not delete %s (it may already be gone): %s", name, exc)
        return False
    return True
