from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from voicerelay.client.controller import CaptureClient
from voicerelay.client.relay import DEFAULT_BASE_URL, RelayClient
from voicerelay.schemas.transcription import LanguageHint

logger = logging.getLogger("voicerelay.client")


async def _record(client: CaptureClient, seconds: Optional[float]) -> str:
    failure = client.start_recording()
    if failure:
        return failure
    if seconds is not None:
        logger.info("Recording for %.1fs", seconds)
        await asyncio.sleep(seconds)
    else:
        await asyncio.to_thread(input, "Recording... press Enter to stop. ")
    return await client.stop_recording()


async def _run(args: argparse.Namespace) -> str:
    relay = RelayClient(args.base_url)
    client = CaptureClient(relay, language=LanguageHint(args.language))

    if args.command == "bundled":
        return await client.transcribe_bundled()
    if args.command == "file":
        return await client.transcribe_file(args.path)
    return await _record(client, args.seconds)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voicerelay-client",
        description="Capture or load audio and transcribe it through the voice relay.",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Relay base URL (default: {DEFAULT_BASE_URL}).",
    )
    parser.add_argument(
        "--language",
        choices=[hint.value for hint in LanguageHint],
        default=LanguageHint.EN.value,
        help="Language hint forwarded to the relay (default: en).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("bundled", help="Transcribe the relay's bundled sample audio.")

    file_parser = subparsers.add_parser("file", help="Transcribe a local audio file.")
    file_parser.add_argument("path", type=Path, help="Path to the audio file to upload.")

    record_parser = subparsers.add_parser("record", help="Record from the microphone and transcribe.")
    record_parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="Stop automatically after this many seconds instead of waiting for Enter.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    print(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
