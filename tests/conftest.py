"""Shared fixtures for the upload service tests."""
import dataclasses
import itertools

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import create_app
from app.services.uploader import UploadService
from app.storage.files import LocalVideoStore


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "public" / "uploads"


@pytest.fixture
def dev_settings(upload_dir):
    return dataclasses.replace(
        settings,
        app_env="development",
        upload_dir=str(upload_dir),
        upload_url_prefix="/uploads",
        max_upload_mb=20,
        allowed_extensions=(".mp4", ".webm", ".ogg"),
        default_purpose="general-video",
        cleanup_mode="tolerant",
    )


@pytest.fixture
def clock():
    """Strictly increasing fake epoch milliseconds."""
    return itertools.count(1700000000000).__next__


@pytest.fixture
def make_client(clock):
    def _make(config):
        app = create_app(config)
        app.state.upload_service = UploadService(LocalVideoStore(config.upload_dir), config, clock=clock)
        return TestClient(app)

    return _make


@pytest.fixture
def api_client(make_client, dev_settings):
    return make_client(dev_settings)


@pytest.fixture
def upload():
    def _upload(client, filename="clip.mp4", content=b"\x00video", **fields):
        data = {key: value for key, value in fields.items() if value is not None}
        return client.post(
            "/api/upload-video",
            files={"file": (filename, content, "application/octet-stream")},
            data=data,
        )

    return _upload
