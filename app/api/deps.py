from __future__ import annotations

from fastapi import Request

from app.core.config import Settings
from app.core.errors import UploadError


def require_development(request: Request) -> None:
    settings: Settings = request.app.state.settings
    if not settings.is_development:
        raise UploadError.forbidden()
