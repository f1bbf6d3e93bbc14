from voicerelay.core.config import get_settings
from voicerelay.integrations.deepgram import DeepgramTranscriber
from voicerelay.services.transcription import TranscriptionService

_transcription_service: TranscriptionService | None = None


async def get_transcription_service() -> TranscriptionService:
    """Provide TranscriptionService instance."""
    global _transcription_service
    if _transcription_service is None:
        settings = get_settings()
        transcriber = (
            DeepgramTranscriber(settings) if settings.deepgram_api_key else None
        )
        _transcription_service = TranscriptionService(
            transcriber,
            default_model=settings.deepgram_default_model,
        )
    return _transcription_service


def reset_transcription_service() -> None:
    """Drop the cached service so the next request rebuilds it from settings."""
    global _transcription_service
    _transcription_service = None
