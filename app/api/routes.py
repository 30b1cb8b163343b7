import logging

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from app.api.deps import require_development
from app.api.models import ErrorResponse, UploadResponse
from app.core.errors import MISSING_FILE_MESSAGE, UploadError
from app.services.uploader import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

_error_responses = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# the form is read by hand so the environment gate runs before the body is parsed
_upload_form_schema = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "file": {"type": "string", "format": "binary"},
                        "purpose": {"type": "string", "default": "general-video"},
                        "oldPath": {"type": "string"},
                    },
                    "required": ["file"],
                }
            }
        },
    }
}


def _service(request: Request) -> UploadService:
    return request.app.state.upload_service


def _text_field(value) -> str | None:
    return value if isinstance(value, str) else None


@router.post(
    "/upload-video",
    response_model=UploadResponse,
    responses=_error_responses,
    openapi_extra=_upload_form_schema,
)
async def upload_video(request: Request):
    require_development(request)
    service = _service(request)
    try:
        async with request.form() as form:
            upload = form.get("file")
            if not isinstance(upload, UploadFile):
                raise UploadError.bad_request(MISSING_FILE_MESSAGE)
            content = await upload.read()
            stored = await service.store_upload(
                content,
                filename=upload.filename,
                purpose=_text_field(form.get("purpose")),
                old_path=_text_field(form.get("oldPath")),
            )
    except UploadError:
        raise
    except Exception:
        logger.exception("Video upload failed")
        raise UploadError.internal()
    return UploadResponse(path=stored.path, filename=stored.filename)
