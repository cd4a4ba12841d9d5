"""Abstract base for all text-generation provider adapters."""

from abc import ABC, abstractmethod

from src.models import ErrorKind

# Instruction prefix length shared by adapters without a separate system channel.
INSTRUCTION_TOKENS = 3


class ProviderError(Exception):
    """Raised when a provider call fails."""

    def __init__(self, provider_name: str, message: str, kind: ErrorKind = ErrorKind.TRANSPORT) -> None:
        self.provider_name = provider_name
        self.message = message
        self.kind = kind
        super().__init__(f"[{provider_name}] {message}")


def split_instruction(prompt: str) -> tuple[str, str]:
    """Split a combined prompt into (instruction, user content).

    The instruction is the first three space-separated tokens; everything
    after the third separator is user content, which may be empty.
    """
    parts = prompt.split(" ", INSTRUCTION_TOKENS)
    instruction = " ".join(parts[:INSTRUCTION_TOKENS])
    user = parts[INSTRUCTION_TOKENS] if len(parts) > INSTRUCTION_TOKENS else ""
    return instruction, user


class AIProvider(ABC):
    """Abstract base for all provider adapters."""

    @abstractmethod
    def name(self) -> str:
        """Return the short provider name (e.g. 'gemini', 'claude')."""
        ...

    @abstractmethod
    async def generate(self, model: str, prompt: str, api_key: str, timeout_sec: float) -> str:
        """Generate a reply for the given prompt.

        Args:
            model: Model identifier to call.
            prompt: Combined instruction + user text.
            api_key: Credential for this provider.
            timeout_sec: Request deadline handed to the SDK client.

        Returns:
            The reply as plain, non-empty text.

        Raises:
            ProviderError: On transport/auth failure, timeout, or empty reply.
        """
        ...
