"""Anthropic Claude provider using anthropic SDK with native async."""

import logging

import anthropic as anthropic_sdk

from config.config_loader import ProviderConfig
from src.models import ErrorKind
from src.providers.base import AIProvider, ProviderError, split_instruction

logger = logging.getLogger(__name__)

_DEFAULT_MAX_TOKENS = 1000


def _flatten_api_error(exc: anthropic_sdk.APIStatusError) -> str:
    """Reduce an Anthropic error body to 'type: ..., message: ...'."""
    body = exc.body if isinstance(exc.body, dict) else {}
    error = body.get("error", body)
    if isinstance(error, dict) and error.get("type"):
        return f"claude API error, type: {error['type']}, message: {error.get('message', exc.message)}"
    return f"claude API error: {exc.message}"


class AnthropicProvider(AIProvider):
    """Anthropic Claude provider via anthropic SDK.

    The combined prompt is split: the leading instruction goes into the
    ``system`` field and the remainder is sent as the single user message.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    def name(self) -> str:
        return self._config.name

    async def generate(self, model: str, prompt: str, api_key: str, timeout_sec: float) -> str:
        system_prompt, user_prompt = split_instruction(prompt)

        request: dict = {
            "model": model,
            "max_tokens": self._config.max_tokens or _DEFAULT_MAX_TOKENS,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            request["system"] = system_prompt

        client = anthropic_sdk.AsyncAnthropic(api_key=api_key, timeout=timeout_sec, max_retries=0)
        try:
            response = await client.messages.create(**request)
        except (anthropic_sdk.AuthenticationError, anthropic_sdk.PermissionDeniedError) as exc:
            raise ProviderError(self.name(), _flatten_api_error(exc), ErrorKind.AUTH) from exc
        except anthropic_sdk.APIStatusError as exc:
            raise ProviderError(self.name(), _flatten_api_error(exc)) from exc
        except anthropic_sdk.APITimeoutError as exc:
            raise ProviderError(self.name(), f"claude API error: {exc}", ErrorKind.TIMEOUT) from exc
        except Exception as exc:
            raise ProviderError(self.name(), f"claude API error: {exc}") from exc
        finally:
            await client.close()

        if not response.content:
            raise ProviderError(self.name(), "no response from Claude API", ErrorKind.EMPTY_RESPONSE)

        content = "\n".join(b.text for b in response.content if b.type == "text")
        if not content:
            raise ProviderError(self.name(), "no text blocks in Claude response", ErrorKind.EMPTY_RESPONSE)

        logger.debug("Claude %s: %d chars", model, len(content))
        return content
