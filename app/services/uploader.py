from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

from app.core.config import Settings
from app.core.errors import (
    INVALID_EXTENSION_MESSAGE,
    INVALID_PURPOSE_MESSAGE,
    MISSING_FILE_MESSAGE,
    UploadError,
    oversize_message,
)
from app.storage import paths as storage_paths
from app.storage.files import CleanupMode, VideoStore, remove_file
from app.storage.locks import PurposeLocks

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class StoredUpload:
    filename: str
    path: str
    size: int


class UploadService:
    """Keeps at most one stored video per purpose in the upload directory."""

    def __init__(
        self,
        store: VideoStore,
        settings: Settings,
        clock: Callable[[], int] | None = None,
        locks: PurposeLocks | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._clock = clock or epoch_millis
        self._locks = locks or PurposeLocks()
        self._cleanup_mode = CleanupMode(settings.cleanup_mode)

    def validate(self, filename: str | None, size: int) -> str:
        """Check presence, extension and size in that order; return the extension."""
        if not filename:
            raise UploadError.bad_request(MISSING_FILE_MESSAGE)
        ext = storage_paths.extension_of(filename)
        if ext not in self._settings.allowed_extensions:
            raise UploadError.bad_request(INVALID_EXTENSION_MESSAGE)
        if size > self._settings.max_upload_bytes:
            raise UploadError.bad_request(oversize_message(self._settings.max_upload_mb))
        return ext

    def resolve_purpose(self, purpose: str | None) -> str:
        value = purpose or self._settings.default_purpose
        if not storage_paths.is_safe_purpose(value):
            raise UploadError.bad_request(INVALID_PURPOSE_MESSAGE)
        return value

    async def store_upload(
        self,
        content: bytes,
        filename: str | None,
        purpose: str | None = None,
        old_path: str | None = None,
    ) -> StoredUpload:
        ext = self.validate(filename, len(content))
        purpose = self.resolve_purpose(purpose)
        new_name = storage_paths.upload_filename(purpose, self._clock(), ext)

        if not await asyncio.to_thread(self._store.exists):
            await asyncio.to_thread(self._store.mkdir_all)

        async with self._locks.hold(purpose):
            if old_path:
                await self._remove_old_path(old_path)
            await self._prune_purpose(purpose, keep=new_name)
            await asyncio.to_thread(self._store.write, new_name, content)

        web_path = storage_paths.public_path(self._settings.upload_url_prefix, new_name)
        logger.info("Video upload complete: %s (%d bytes)", web_path, len(content))
        return StoredUpload(filename=new_name, path=web_path, size=len(content))

    async def _remove_old_path(self, old_path: str) -> None:
        name = storage_paths.filename_from_public_path(self._settings.upload_url_prefix, old_path)
        if name is None:
            logger.info("Ignoring oldPath outside the upload directory: %r", old_path)
            return
        if await asyncio.to_thread(remove_file, self._store, name, self._cleanup_mode):
            logger.info("Deleted previous video: %s", old_path)

    async def _prune_purpose(self, purpose: str, keep: str) -> None:
        prefix = storage_paths.purpose_prefix(purpose)
        try:
            names = await asyncio.to_thread(self._store.list)
        except OSError as exc:
            if self._cleanup_mode is CleanupMode.STRICT:
                raise
            logger.info("Could not list upload directory for cleanup: %s", exc)
            return
        for name in names:
            if name.startswith(prefix) and name != keep:
                if await asyncio.to_thread(remove_file, self._store, name, self._cleanup_mode):
                    logger.info("Deleted earlier %s video: %s", purpose, name)
