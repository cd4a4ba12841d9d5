"""Pure dataclasses for the multidoc fan-out pipeline. No logic beyond formatting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.providers.base import ProviderError


class ProviderKind(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    AUTH = "auth"
    EMPTY_RESPONSE = "empty_response"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class ModelSpec:
    model: str               # e.g. "gpt-4o-2024-08-06"
    provider: ProviderKind


@dataclass(frozen=True)
class CallResult:
    model: str
    latency_sec: float
    content: str | None = None
    error: ProviderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """Response text, or the error placeholder folded into the summary prompt."""
        if self.error is not None:
            return f"Error from {self.model}: {self.error.message}"
        return self.content or ""


@dataclass(frozen=True)
class RunResult:
    results: list[CallResult]
    summary: str
    summary_latency_sec: float
    total_duration_sec: float
