import subprocess
import sys
from pathlib import Path

import httpx
import pytest

from voicerelay.client import cli
from voicerelay.client.relay import RelayClient


def _patch_relay(monkeypatch: pytest.MonkeyPatch, seen: list[httpx.Request]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"transcript": "from the relay"})

    def relay_factory(base_url: str) -> RelayClient:
        return RelayClient(
            base_url,
            client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    monkeypatch.setattr(cli, "RelayClient", relay_factory)


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args(["bundled"])

    assert args.command == "bundled"
    assert args.language == "en"
    assert args.base_url == "http://127.0.0.1:8000"


def test_parser_rejects_unknown_language() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--language", "fr", "bundled"])


def test_file_command_prints_transcript(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    audio = tmp_path / "clip.wav"
    audio.write_bytes(b"RIFF")
    seen: list[httpx.Request] = []
    _patch_relay(monkeypatch, seen)

    cli.main(["--base-url", "http://relay.test", "--language", "ko", "file", str(audio)])

    assert capsys.readouterr().out.strip() == "from the relay"
    assert seen[-1].headers["x-language"] == "ko"
    assert str(seen[-1].url) == "http://relay.test/api/transcribe"


class _StubRecorder:
    def __init__(self) -> None:
        self.stopped = False

    def start_recording(self) -> None:
        return None

    async def stop_recording(self) -> str:
        self.stopped = True
        return "recorded"


@pytest.mark.asyncio
async def test_record_with_zero_seconds_stops_without_prompt(monkeypatch: pytest.MonkeyPatch) -> None:
    async def unexpected_prompt(*args, **kwargs):
        raise AssertionError("record --seconds 0 must not wait for Enter")

    monkeypatch.setattr(cli.asyncio, "to_thread", unexpected_prompt)
    recorder = _StubRecorder()

    assert await cli._record(recorder, 0) == "recorded"  # type: ignore[arg-type]
    assert recorder.stopped


def test_client_package_does_not_load_server_settings() -> None:
    root_dir = Path(__file__).resolve().parents[1]
    script = (
        "import sys\n"
        "import voicerelay.client, voicerelay.client.cli\n"
        "loaded = [m for m in ('voicerelay.core.config', 'pydantic_settings') if m in sys.modules]\n"
        "assert not loaded, loaded\n"
    )

    result = subprocess.run(
        [sys.executable, "-c", script], cwd=root_dir, capture_output=True, text=True
    )

    assert result.returncode == 0, result.stderr
