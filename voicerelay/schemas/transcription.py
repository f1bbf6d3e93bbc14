from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class LanguageHint(str, Enum):
    """Languages the relay knows how to configure the provider for."""

    EN = "en"
    KO = "ko"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LanguageHint":
        """Resolve a header value, falling back to English when absent or unknown."""
        if not value:
            return cls.EN
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.EN


class TranscriptResponse(BaseModel):
    """Response payload for a relayed transcription."""

    transcript: str = Field(..., description="Transcript returned by the provider, possibly empty.")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Generic error message safe to show to callers.")
