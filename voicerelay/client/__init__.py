from voicerelay.client.capture import (
    AudioInput,
    AudioPayload,
    CaptureState,
    EmptyCaptureError,
    MicrophoneAccessError,
    RecordingInProgressError,
    RecordingNotStartedError,
    RecordingSession,
)
from voicerelay.client.controller import CaptureClient
from voicerelay.client.relay import RelayClient, RelayRequestError

__all__ = [
    "AudioInput",
    "AudioPayload",
    "CaptureClient",
    "CaptureState",
    "EmptyCaptureError",
    "MicrophoneAccessError",
    "RecordingInProgressError",
    "RecordingNotStartedError",
    "RecordingSession",
    "RelayClient",
    "RelayRequestError",
]
