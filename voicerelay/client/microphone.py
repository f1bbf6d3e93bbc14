from __future__ import annotations

import io
import logging
import wave
from typing import Any, Callable

from voicerelay.client.capture import AudioInput, MicrophoneAccessError

logger = logging.getLogger(__name__)

SAMPLE_WIDTH_BYTES = 2


class PyAudioMicrophone(AudioInput):
    """Default input device captured as 16-bit PCM through a PyAudio callback stream."""

    filename = "mic-input.wav"
    content_type = "audio/wav"

    def __init__(
        self,
        *,
        rate: int = 16000,
        channels: int = 1,
        frames_per_buffer: int = 1024,
    ) -> None:
        self._rate = rate
        self._channels = channels
        self._frames_per_buffer = frames_per_buffer
        self._audio: Any = None
        self._stream: Any = None

    def open(self, on_chunk: Callable[[bytes], None]) -> None:
        try:
            import pyaudio
        except ImportError as exc:
            raise MicrophoneAccessError(
                "PyAudio is not installed; install the 'mic' extra to record."
            ) from exc

        def _callback(in_data, frame_count, time_info, status_flags):
            if in_data:
                on_chunk(in_data)
            return (None, pyaudio.paContinue)

        self._audio = pyaudio.PyAudio()
        try:
            self._stream = self._audio.open(
                format=pyaudio.paInt16,
                channels=self._channels,
                rate=self._rate,
                input=True,
                frames_per_buffer=self._frames_per_buffer,
                stream_callback=_callback,
            )
        except OSError as exc:
            self._audio.terminate()
            self._audio = None
            raise MicrophoneAccessError(
                "Microphone is unavailable or access was denied."
            ) from exc
        self._stream.start_stream()
        logger.debug("Opened microphone stream at %s Hz", self._rate)

    def close(self) -> None:
        stream, audio = self._stream, self._audio
        self._stream = None
        self._audio = None
        try:
            if stream is not None:
                stream.stop_stream()
                stream.close()
        finally:
            if audio is not None:
                audio.terminate()

    def package(self, data: bytes) -> bytes:
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(self._channels)
            wav.setsampwidth(SAMPLE_WIDTH_BYTES)
            wav.setframerate(self._rate)
            wav.writeframes(data)
        return buffer.getvalue()
