from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: Literal[True] = True
    path: str
    filename: str


class ErrorResponse(BaseModel):
    error: str
