import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from voicerelay.api.deps import get_transcription_service
from voicerelay.schemas.transcription import ErrorResponse, LanguageHint, TranscriptResponse
from voicerelay.services.transcription import TranscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_NO_FILE = "No file uploaded"
MSG_TRANSCRIPTION_FAILED = "Transcription failed"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/transcribe",
    response_model=TranscriptResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Relay uploaded audio to the speech-to-text provider.",
    status_code=status.HTTP_200_OK,
    openapi_extra={
        "requestBody": {
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"file": {"type": "string", "format": "binary"}},
                        "required": ["file"],
                    }
                }
            },
        }
    },
)
async def transcribe_audio(
    request: Request,
    x_language: Optional[str] = Header(default=None),
    service: TranscriptionService = Depends(get_transcription_service),
):
    # A text `file` field or an unparsable body is missing input (400), not a 422.
    try:
        async with request.form() as form:
            upload = form.get("file")
            if not isinstance(upload, UploadFile):
                return _error(status.HTTP_400_BAD_REQUEST, MSG_NO_FILE)
            payload = await upload.read()
            filename = upload.filename
            content_type = upload.content_type or "application/octet-stream"
    except Exception:
        logger.warning("Rejected unreadable transcription upload", exc_info=True)
        return _error(status.HTTP_400_BAD_REQUEST, MSG_NO_FILE)

    if not payload:
        return _error(status.HTTP_400_BAD_REQUEST, MSG_NO_FILE)

    try:
        transcript = await service.transcribe_audio(
            payload,
            content_type=content_type,
            language=LanguageHint.parse(x_language),
        )
    except Exception:
        logger.exception("Transcription of %s failed", filename)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, MSG_TRANSCRIPTION_FAILED)

    return TranscriptResponse(transcript=transcript)
