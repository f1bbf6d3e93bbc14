import uvicorn

from voicerelay.core.app import create_app
from voicerelay.core.config import get_settings

app = create_app()


def run() -> None:
    """Entrypoint for `voicerelay-api` script."""
    settings = get_settings()
    uvicorn.run(
        "voicerelay.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        factory=False,
    )


if __name__ == "__main__":
    run()
