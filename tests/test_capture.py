import io
import wave
from typing import Callable, Optional

import pytest

from voicerelay.client.capture import (
    AudioInput,
    CaptureState,
    EmptyCaptureError,
    MicrophoneAccessError,
    RecordingInProgressError,
    RecordingNotStartedError,
    RecordingSession,
)
from voicerelay.client.microphone import PyAudioMicrophone


class FakeInput(AudioInput):
    filename = "mic-input.raw"
    content_type = "audio/l16"

    def __init__(self, *, deny: bool = False) -> None:
        self.deny = deny
        self.on_chunk: Optional[Callable[[bytes], None]] = None
        self.opened = 0
        self.closed = 0

    def open(self, on_chunk: Callable[[bytes], None]) -> None:
        if self.deny:
            raise MicrophoneAccessError("Permission denied")
        self.opened += 1
        self.on_chunk = on_chunk

    def close(self) -> None:
        self.closed += 1

    def emit(self, chunk: bytes) -> None:
        assert self.on_chunk is not None
        self.on_chunk(chunk)


def test_recording_concatenates_chunks_and_releases_input() -> None:
    source = FakeInput()
    session = RecordingSession(source)

    session.start()
    assert session.state is CaptureState.RECORDING
    source.emit(b"ab")
    source.emit(b"")
    source.emit(b"cd")
    payload = session.stop()

    assert payload.data == b"abcd"
    assert payload.filename == "mic-input.raw"
    assert payload.content_type == "audio/l16"
    assert session.state is CaptureState.IDLE
    assert source.closed == 1


def test_stop_without_audio_raises_empty_capture_and_still_releases() -> None:
    source = FakeInput()
    session = RecordingSession(source)

    session.start()
    with pytest.raises(EmptyCaptureError):
        session.stop()

    assert source.closed == 1
    assert session.state is CaptureState.IDLE


def test_second_start_is_rejected_while_recording() -> None:
    source = FakeInput()
    session = RecordingSession(source)

    session.start()
    with pytest.raises(RecordingInProgressError):
        session.start()

    assert source.opened == 1
    assert session.recording


def test_stop_when_idle_raises() -> None:
    session = RecordingSession(FakeInput())

    with pytest.raises(RecordingNotStartedError):
        session.stop()


def test_permission_denied_leaves_session_idle() -> None:
    session = RecordingSession(FakeInput(deny=True))

    with pytest.raises(MicrophoneAccessError):
        session.start()

    assert session.state is CaptureState.IDLE


def test_chunks_after_stop_are_dropped() -> None:
    source = FakeInput()
    session = RecordingSession(source)

    session.start()
    source.emit(b"first")
    session.stop()
    source.emit(b"late")

    session.start()
    source.emit(b"second")
    assert session.stop().data == b"second"


def test_session_can_record_again_after_empty_capture() -> None:
    source = FakeInput()
    session = RecordingSession(source)

    session.start()
    with pytest.raises(EmptyCaptureError):
        session.stop()

    session.start()
    source.emit(b"\x01\x02")
    assert session.stop().data == b"\x01\x02"


def test_microphone_packages_pcm_as_wav() -> None:
    microphone = PyAudioMicrophone(rate=16000, channels=1)
    pcm = b"\x00\x01" * 160

    packaged = microphone.package(pcm)

    with wave.open(io.BytesIO(packaged), "rb") as wav:
        assert wav.getframerate() == 16000
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 2
        assert wav.readframes(wav.getnframes()) == pcm
    assert microphone.content_type == "audio/wav"
