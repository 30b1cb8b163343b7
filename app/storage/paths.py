from __future__ import annotations

from pathlib import Path, PurePosixPath


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def extension_of(filename: str) -> str:
    return PurePosixPath(filename.replace("\\", "/")).suffix.lower()


def upload_filename(purpose: str, timestamp_ms: int, ext: str) -> str:
    return f"{purpose}-{timestamp_ms}{ext}"


def purpose_prefix(purpose: str) -> str:
    return f"{purpose}-"


def public_path(url_prefix: str, filename: str) -> str:
    return f"{url_prefix.rstrip('/')}/{filename}"


def _is_plain_name(name: str) -> bool:
    return bool(name) and name not in {".", ".."} and not any(c in name for c in "/\\\x00")


def filename_from_public_path(url_prefix: str, path: str) -> str | None:
    """Map a previously issued public path back to a name in the upload dir.

    Returns None when the path is outside the prefix or would leave the
    upload directory.
    """
    prefix = f"{url_prefix.rstrip('/')}/"
    if not path.startswith(prefix):
        return None
    name = path[len(prefix):]
    return name if _is_plain_name(name) else None


def is_safe_purpose(purpose: str) -> bool:
    return _is_plain_name(purpose)
