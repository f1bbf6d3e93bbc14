"""Microphone capture lifecycle: idle -> recording -> stopping -> idle."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioPayload:
    """Audio bytes plus the filename and content type they are uploaded with."""

    data: bytes
    filename: str
    content_type: str

    @classmethod
    def from_path(cls, path: Path, content_type: str) -> "AudioPayload":
        return cls(data=path.read_bytes(), filename=path.name, content_type=content_type)


class CaptureState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPING = "stopping"


class CaptureError(RuntimeError):
    """Base class for client-side capture failures."""


class RecordingInProgressError(CaptureError):
    """Raised when a recording is started while another one is active."""


class RecordingNotStartedError(CaptureError):
    """Raised when stopping a session that is not recording."""


class EmptyCaptureError(CaptureError):
    """Raised when a recording produced no audio bytes."""


class MicrophoneAccessError(CaptureError):
    """Raised when the microphone is unavailable or access was refused."""


class AudioInput:
    """Abstract source of raw audio chunks."""

    filename: str = "capture.bin"
    content_type: str = "application/octet-stream"

    def open(self, on_chunk: Callable[[bytes], None]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def package(self, data: bytes) -> bytes:
        """Wrap concatenated chunks in the container the input uploads as."""
        return data


class RecordingSession:
    """Single-recording state machine over an AudioInput.

    Chunks may arrive from the input's own thread, so every state change
    happens under a lock. `stop()` always releases the input and either
    returns an AudioPayload or raises EmptyCaptureError.
    """

    def __init__(self, audio_input: AudioInput) -> None:
        self._input = audio_input
        self._state = CaptureState.IDLE
        self._chunks: list[bytes] = []
        self._lock = threading.Lock()

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def recording(self) -> bool:
        return self._state is CaptureState.RECORDING

    def start(self) -> None:
        with self._lock:
            if self._state is not CaptureState.IDLE:
                raise RecordingInProgressError("A recording is already in progress.")
            self._chunks = []
            self._state = CaptureState.RECORDING

        try:
            self._input.open(self.push_chunk)
        except Exception:
            with self._lock:
                self._state = CaptureState.IDLE
            raise
        logger.info("Recording started")

    def push_chunk(self, chunk: bytes) -> None:
        if not chunk:
            return
        with self._lock:
            if self._state is not CaptureState.RECORDING:
                logger.debug("Dropping %s byte chunk received while %s", len(chunk), self._state.value)
                return
            self._chunks.append(bytes(chunk))

    def stop(self) -> AudioPayload:
        with self._lock:
            if self._state is not CaptureState.RECORDING:
                raise RecordingNotStartedError("No recording is in progress.")
            self._state = CaptureState.STOPPING

        try:
            self._input.close()
        finally:
            with self._lock:
                data = b"".join(self._chunks)
                self._chunks = []
                self._state = CaptureState.IDLE

        logger.info("Recording stopped with %s bytes captured", len(data))
        if not data:
            raise EmptyCaptureError("No audio captured.")
        return AudioPayload(
            data=self._input.package(data),
            filename=self._input.filename,
            content_type=self._input.content_type,
        )
