from __future__ import annotations

import logging
import mimetypes
from typing import Callable, Optional

import httpx

from voicerelay.client.capture import AudioPayload
from voicerelay.schemas.transcription import LanguageHint

logger = logging.getLogger(__name__)

LANGUAGE_HEADER = "x-language"
DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class RelayRequestError(RuntimeError):
    """Raised when the relay cannot be reached or answers with an unreadable body."""


class RelayClient:
    """HTTP client for the transcription relay and its bundled static asset."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transcribe_path: str = "/api/transcribe",
        static_path: str = "/static",
        timeout: float = 120.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transcribe_url = f"{self._base_url}{transcribe_path}"
        self._static_url = f"{self._base_url}{static_path.rstrip('/')}"
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        )

    async def fetch_bundled_asset(self, name: str = "sample.wav") -> AudioPayload:
        url = f"{self._static_url}/{name}"
        try:
            async with self._client_factory() as client:
                response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RelayRequestError(f"Failed to fetch bundled audio from {url}.") from exc

        content_type = (
            response.headers.get("content-type")
            or mimetypes.guess_type(name)[0]
            or "application/octet-stream"
        )
        return AudioPayload(data=response.content, filename=name, content_type=content_type)

    async def submit(self, payload: AudioPayload, language: LanguageHint) -> Optional[str]:
        """Upload one payload and return its transcript, or None when the relay gave none."""
        files = {"file": (payload.filename, payload.data, payload.content_type)}
        headers = {LANGUAGE_HEADER: language.value}

        try:
            async with self._client_factory() as client:
                response = await client.post(self._transcribe_url, files=files, headers=headers)
        except httpx.HTTPError as exc:
            raise RelayRequestError("Failed to reach the transcription relay.") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise RelayRequestError(
                f"Relay answered {response.status_code} with a non-JSON body."
            ) from exc

        if not isinstance(body, dict):
            return None
        if response.is_error:
            logger.warning("Relay answered %s: %s", response.status_code, body.get("error"))
        transcript = body.get("transcript")
        return transcript if isinstance(transcript, str) else None
