import sys
from pathlib import Path

import pytest


def _ensure_local_package_on_path() -> None:
    root_dir = Path(__file__).resolve().parents[1]
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))


_ensure_local_package_on_path()

from voicerelay.api.deps import reset_transcription_service  # noqa: E402
from voicerelay.core.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Start every test from unconfigured settings and a fresh service."""
    monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)
    get_settings.cache_clear()
    reset_transcription_service()
    yield
    get_settings.cache_clear()
    reset_transcription_service()
