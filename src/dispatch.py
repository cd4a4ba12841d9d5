"""Fan-out coordinator: one concurrent call per model, results kept in dispatch order."""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from src.models import CallResult, ErrorKind, ModelSpec
from src.providers.base import ProviderError
from src.router import Router

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0


async def call_model(
    router: Router,
    model: str,
    prompt: str,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> str:
    """Route a prompt to the adapter for ``model`` and enforce the deadline.

    Expiry cancels the adapter coroutine and is reported as a TIMEOUT
    ProviderError. Unexpected exceptions are wrapped as TRANSPORT errors.
    """
    provider, api_key = router.resolve(model)
    try:
        return await asyncio.wait_for(
            provider.generate(model, prompt, api_key, timeout_sec),
            timeout=timeout_sec,
        )
    except TimeoutError as exc:
        raise ProviderError(
            provider.name(), f"deadline exceeded after {timeout_sec:g}s", ErrorKind.TIMEOUT
        ) from exc
    except ProviderError:
        raise
    except Exception as exc:
        raise ProviderError(provider.name(), f"Unexpected error: {exc}") from exc


async def _run_one(
    spec: ModelSpec,
    prompt: str,
    router: Router,
    timeout_sec: float,
    on_result: Callable[[CallResult], None] | None,
) -> CallResult:
    """Call a single model. Never raises: failures are returned in the result."""
    start = time.monotonic()
    try:
        content = await call_model(router, spec.model, prompt, timeout_sec)
        result = CallResult(model=spec.model, latency_sec=time.monotonic() - start, content=content)
        logger.debug("Received response from %s (%.2fs)", spec.model, result.latency_sec)
    except ProviderError as exc:
        result = CallResult(model=spec.model, latency_sec=time.monotonic() - start, error=exc)
        logger.warning("Provider %s failed for %s: %s", exc.provider_name, spec.model, exc.message)

    if on_result:
        on_result(result)
    return result


async def dispatch_all(
    specs: Sequence[ModelSpec],
    system_prompt: str,
    user_input: str,
    router: Router,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
    on_result: Callable[[CallResult], None] | None = None,
) -> list[CallResult]:
    """Send the same prompt to every model concurrently.

    Args:
        specs: Models to query; the returned list follows this order.
        system_prompt: Instruction prefixed to the user input.
        user_input: Raw user text.
        router: Resolves each model to an adapter and credential.
        timeout_sec: Per-call deadline.
        on_result: Optional callback invoked as each call finishes
            (completion order, for progress output only).

    Returns:
        One CallResult per spec, slot i belonging to specs[i].
    """
    prompt = system_prompt + " " + user_input

    logger.info("Dispatching to %d models", len(specs))
    results = await asyncio.gather(
        *(_run_one(spec, prompt, router, timeout_sec, on_result) for spec in specs)
    )

    failed = sum(1 for r in results if not r.ok)
    logger.info("Fan-out complete: %d/%d models succeeded", len(results) - failed, len(results))
    return list(results)
