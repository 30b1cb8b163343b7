from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import routes
from app.core.config import Settings, settings
from app.core.errors import register_error_handlers
from app.core.log import configure_logging
from app.services.uploader import UploadService
from app.storage import paths as storage_paths
from app.storage.files import LocalVideoStore

logger = logging.getLogger(__name__)


def create_app(config: Settings = settings) -> FastAPI:
    configure_logging(config.log_level)

    app = FastAPI(title="video-upload-service")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )
    register_error_handlers(app)

    store = LocalVideoStore(config.upload_dir)
    app.state.settings = config
    app.state.upload_service = UploadService(store, config)

    @app.on_event("startup")
    async def on_startup() -> None:
        if config.is_development:
            storage_paths.ensure_dir(store.root)

    @app.middleware("http")
    async def log_request_time(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time
        logger.info(
            "method=%s path=%s status_code=%d duration=%.3fs",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "env": config.app_env}

    app.include_router(routes.router)

    # in production a real static server owns this prefix
    app.mount(
        config.upload_url_prefix,
        StaticFiles(directory=store.root, check_dir=False),
        name="uploads",
    )
    return app


app = create_app()
