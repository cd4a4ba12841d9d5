"""Run controller: validate input, fan out, synthesize, time the whole run."""

import logging
import time
from collections.abc import Callable

from config.config_loader import AppConfig
from src.dispatch import dispatch_all
from src.models import CallResult, RunResult
from src.router import Router
from src.synthesis import synthesize

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Raised for blank input. Nothing is dispatched."""


def validate_input(text: str) -> str:
    if not text.strip():
        raise InputError("Input cannot be empty")
    return text


async def run(
    user_input: str,
    config: AppConfig,
    router: Router,
    on_result: Callable[[CallResult], None] | None = None,
    on_dispatched: Callable[[list[CallResult]], None] | None = None,
) -> RunResult:
    """Run the full pipeline for one input.

    ``on_result`` fires as each fan-out call finishes; ``on_dispatched`` fires
    once after all of them, before the synthesis call.

    Raises:
        InputError: If the input is blank (before any provider is called).
        SynthesisError: If the final summary call fails.
    """
    start = time.monotonic()
    validate_input(user_input)

    results = await dispatch_all(
        specs=config.models,
        system_prompt=config.system_prompt,
        user_input=user_input,
        router=router,
        timeout_sec=config.timeout_sec,
        on_result=on_result,
    )

    if on_dispatched:
        on_dispatched(results)

    summary, summary_latency = await synthesize(
        results,
        router=router,
        model=config.synthesizer_model,
        timeout_sec=config.timeout_sec,
    )

    total = time.monotonic() - start
    logger.info("Run complete in %.2fs", total)

    return RunResult(
        results=results,
        summary=summary,
        summary_latency_sec=summary_latency,
        total_duration_sec=total,
    )
