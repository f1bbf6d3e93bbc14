from __future__ import annotations

import logging

from voicerelay.integrations.deepgram import (
    DeepgramTranscriber,
    ProviderOptions,
    extract_transcript,
)
from voicerelay.schemas.transcription import LanguageHint

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nova-3"


def build_provider_options(
    language: LanguageHint,
    *,
    default_model: str = DEFAULT_MODEL,
) -> ProviderOptions:
    if language is LanguageHint.KO:
        return ProviderOptions(
            model="general",
            smart_format=True,
            language="ko",
            tier="enhanced",
            version="beta",
        )
    return ProviderOptions(model=default_model, smart_format=True)

class TranscriptionService:
    """Coordinate relaying uploaded audio to the speech-to-text provider."""

    def __init__(
        self,
        transcriber: DeepgramTranscriber | None,
        *,
        default_model: str = DEFAULT_MODEL,
    ) -> None:
        self._transcriber = transcriber
        self._default_model = default_model

    @property
    def is_configured(self) -> bool:
        return self._transcriber is not None

    async def transcribe_audio(
        self,
        audio: bytes,
        *,
        content_type: str,
        language: LanguageHint,
    ) -> str:
        if not self._transcriber:
            raise RuntimeError("Deepgram speech recognition is not configured.")

        options = build_provider_options(language, default_model=self._default_model)
        logger.info(
            "Relaying %s bytes of %s audio (language=%s model=%s)",
            len(audio),
            content_type,
            language.value,
            options.model,
        )
        payload = await self._transcriber.transcribe(audio, content_type, options)
        return extract_transcript(payload) or ""
