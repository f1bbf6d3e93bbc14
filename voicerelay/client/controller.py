from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from voicerelay.client.capture import (
    AudioInput,
    AudioPayload,
    EmptyCaptureError,
    MicrophoneAccessError,
    RecordingInProgressError,
    RecordingNotStartedError,
    RecordingSession,
)
from voicerelay.client.microphone import PyAudioMicrophone
from voicerelay.client.relay import RelayClient, RelayRequestError
from voicerelay.schemas.transcription import LanguageHint

logger = logging.getLogger(__name__)

MSG_NO_TRANSCRIPT = "No transcript returned"
MSG_TRANSCRIBE_FAILED = "Failed to transcribe"
MSG_NO_AUDIO = "No audio captured"
MSG_ALREADY_RECORDING = "Recording already in progress"


class CaptureClient:
    """Turn user actions into relay submissions and status text for display.

    The language applies to every submission path: bundled asset, local
    file and microphone recording.
    """

    def __init__(
        self,
        relay: RelayClient,
        *,
        language: LanguageHint = LanguageHint.EN,
        audio_input: AudioInput | None = None,
        bundled_asset: str = "sample.wav",
    ) -> None:
        self.language = language
        self._relay = relay
        self._session = RecordingSession(audio_input or PyAudioMicrophone())
        self._bundled_asset = bundled_asset

    @property
    def recording(self) -> bool:
        return self._session.recording

    async def transcribe_bundled(self) -> str:
        try:
            payload = await self._relay.fetch_bundled_asset(self._bundled_asset)
        except RelayRequestError:
            logger.exception("Could not load bundled audio %s", self._bundled_asset)
            return MSG_TRANSCRIBE_FAILED
        return await self._submit(payload)

    async def transcribe_file(self, path: Path) -> str:
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            payload = AudioPayload.from_path(path, content_type)
        except OSError:
            logger.exception("Could not read audio file %s", path)
            return MSG_TRANSCRIBE_FAILED
        return await self._submit(payload)

    def start_recording(self) -> Optional[str]:
        """Start capturing; returns status text when the recording could not start."""
        try:
            self._session.start()
        except RecordingInProgressError:
            return MSG_ALREADY_RECORDING
        except MicrophoneAccessError:
            logger.exception("Microphone could not be opened")
            return MSG_TRANSCRIBE_FAILED
        return None

    async def stop_recording(self) -> str:
        try:
            payload = self._session.stop()
        except (EmptyCaptureError, RecordingNotStartedError) as exc:
            logger.error("%s", exc)
            return MSG_NO_AUDIO
        return await self._submit(payload)

    async def _submit(self, payload: AudioPayload) -> str:
        try:
            transcript = await self._relay.submit(payload, self.language)
        except RelayRequestError:
            logger.exception("Transcription request for %s failed", payload.filename)
            return MSG_TRANSCRIBE_FAILED
        return transcript or MSG_NO_TRANSCRIPT
