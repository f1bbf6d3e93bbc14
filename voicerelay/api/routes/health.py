from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from voicerelay.api.deps import get_transcription_service
from voicerelay.services.transcription import TranscriptionService

router = APIRouter()


@router.get("/healthz")
async def healthcheck(
    service: TranscriptionService = Depends(get_transcription_service),
) -> dict[str, str]:
    """Liveness probe; also reports whether a provider credential is loaded."""
    return {
        "status": "ok",
        "provider": "configured" if service.is_configured else "unconfigured",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
