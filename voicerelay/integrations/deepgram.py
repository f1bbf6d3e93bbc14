from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from voicerelay.core.config import AppSettings

logger = logging.getLogger(__name__)


class DeepgramTranscriptionError(RuntimeError):
    """Raised when Deepgram pre-recorded transcription fails."""


@dataclass(frozen=True)
class ProviderOptions:
    """Query options sent alongside the audio to Deepgram."""

    model: str
    smart_format: bool = True
    language: Optional[str] = None
    tier: Optional[str] = None
    version: Optional[str] = None

    def to_params(self) -> dict[str, str]:
        params = {
            "model": self.model,
            "smart_format": "true" if self.smart_format else "false",
        }
        if self.language:
            params["language"] = self.language
        if self.tier:
            params["tier"] = self.tier
        if self.version:
            params["version"] = self.version
        return params


class DeepgramTranscriber:
    """Thin wrapper around the Deepgram `/v1/listen` REST API for pre-recorded audio."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        if not settings.deepgram_api_key:
            raise ValueError("Deepgram credentials are not configured.")

        self._api_key = settings.deepgram_api_key.get_secret_value()
        self._endpoint = settings.deepgram_endpoint.rstrip("/")
        timeout = httpx.Timeout(settings.deepgram_timeout_seconds)
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=timeout)
        )

    async def transcribe(
        self,
        audio: bytes,
        content_type: str,
        options: ProviderOptions,
    ) -> dict[str, Any]:
        """Send audio bytes to Deepgram and return the decoded response body."""
        headers = {
            "Authorization": f"Token {self._api_key}",
            "Content-Type": content_type or "application/octet-stream",
            "Accept": "application/json",
        }

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self._endpoint,
                    params=options.to_params(),
                    headers=headers,
                    content=audio,
                )
        except httpx.HTTPError as exc:
            raise DeepgramTranscriptionError("Failed to reach Deepgram.") from exc

        if response.status_code in (401, 403):
            raise DeepgramTranscriptionError("Deepgram authentication failed.")
        if response.status_code == 429:
            raise DeepgramTranscriptionError("Deepgram request throttled.")
        if response.status_code >= 500:
            raise DeepgramTranscriptionError(
                "Deepgram service is unavailable. Try again later."
            )
        if response.status_code != 200:
            message = _extract_error_message(response)
            raise DeepgramTranscriptionError(
                message or f"Deepgram request failed with status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DeepgramTranscriptionError("Deepgram returned a non-JSON body.") from exc

        request_id = _request_id(payload)
        if request_id:
            logger.debug("Deepgram request %s completed", request_id)
        return payload


def extract_transcript(payload: Any) -> Optional[str]:
    """Return `results.channels[0].alternatives[0].transcript`, or None if any level is missing."""
    results = _field(payload, "results")
    channel = _first(_field(results, "channels"))
    alternative = _first(_field(channel, "alternatives"))
    transcript = _field(alternative, "transcript")
    if isinstance(transcript, str):
        return transcript
    return None


def _field(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _request_id(payload: Any) -> Optional[str]:
    request_id = _field(_field(payload, "metadata"), "request_id")
    return request_id if isinstance(request_id, str) else None


def _extract_error_message(response: httpx.Response) -> str | None:
    try:
        payload: dict[str, Any] = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("err_msg") or payload.get("message") or payload.get("error")
        if message:
            return str(message)
    return None
