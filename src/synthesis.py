"""Final synthesis: fold all fan-out results into one prompt and summarize it."""

import logging
import time

from src.dispatch import DEFAULT_TIMEOUT_SEC, call_model
from src.models import CallResult
from src.providers.base import ProviderError
from src.router import Router

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "Summarize the following outputs from different AI models:\n"


class SynthesisError(Exception):
    """Raised when the final summary call fails. Fatal to the run."""

    def __init__(self, model: str, cause: ProviderError) -> None:
        self.model = model
        self.cause = cause
        super().__init__(f"Error getting final output from {model}: {cause.message}")


def build_combined_prompt(results: list[CallResult]) -> str:
    """Build the summary prompt from results in dispatch order.

    Failed calls contribute their error placeholder instead of being dropped.
    """
    parts = [SUMMARY_HEADER]
    for result in results:
        parts.append(f"Output from {result.model} ({result.latency_sec:.2f}s): {result.text}\n\n")
    return "".join(parts)


async def synthesize(
    results: list[CallResult],
    router: Router,
    model: str,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> tuple[str, float]:
    """Run the synthesis call.

    Args:
        results: Fully populated fan-out results.
        router: Resolves the synthesis model to its adapter.
        model: Designated synthesis model.
        timeout_sec: Deadline for the call.

    Returns:
        (summary text, latency in seconds)

    Raises:
        SynthesisError: If the synthesis call fails for any reason.
    """
    prompt = build_combined_prompt(results)

    logger.info("Running synthesis via %s", model)

    start = time.monotonic()
    try:
        summary = await call_model(router, model, prompt, timeout_sec)
    except ProviderError as exc:
        raise SynthesisError(model, exc) from exc

    return summary, time.monotonic() - start
