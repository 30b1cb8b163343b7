from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _get_env(name: str, default: str | None = None) -> str:
    value = os.environ.get(name, default)
    if value is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return value


def _split_extensions(raw: str) -> tuple[str, ...]:
    return tuple(ext.strip().lower() for ext in raw.split(",") if ext.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str
    upload_dir: str
    upload_url_prefix: str
    max_upload_mb: int
    allowed_extensions: tuple[str, ...]
    default_purpose: str
    cleanup_mode: str
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


settings = Settings(
    app_env=_get_env("APP_ENV", "production"),
    upload_dir=_get_env("UPLOAD_DIR", str(Path.cwd() / "public" / "uploads")),
    upload_url_prefix=_get_env("UPLOAD_URL_PREFIX", "/uploads").rstrip("/"),
    max_upload_mb=int(_get_env("MAX_UPLOAD_MB", "20")),
    allowed_extensions=_split_extensions(_get_env("ALLOWED_EXTENSIONS", ".mp4,.webm,.ogg")),
    default_purpose=_get_env("DEFAULT_PURPOSE", "general-video"),
    cleanup_mode=_get_env("CLEANUP_MODE", "tolerant"),
    log_level=_get_env("LOG_LEVEL", "INFO"),
)
