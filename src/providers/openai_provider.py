"""OpenAI provider using openai SDK with native async."""

import logging

import openai
from openai import AsyncOpenAI

from config.config_loader import ProviderConfig
from src.models import ErrorKind
from src.providers.base import AIProvider, ProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """OpenAI (and OpenAI-compatible) chat completions via openai SDK."""

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    def name(self) -> str:
        return self._config.name

    async def generate(self, model: str, prompt: str, api_key: str, timeout_sec: float) -> str:
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self._config.base_url,
            timeout=timeout_sec,
            max_retries=0,
        )
        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ProviderError(self.name(), f"error calling OpenAI {model}: {exc}", ErrorKind.AUTH) from exc
        except openai.APITimeoutError as exc:
            raise ProviderError(self.name(), f"error calling OpenAI {model}: {exc}", ErrorKind.TIMEOUT) from exc
        except Exception as exc:
            raise ProviderError(self.name(), f"error calling OpenAI {model}: {exc}") from exc
        finally:
            await client.close()

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message.content:
            raise ProviderError(
                self.name(), "no response choices returned from OpenAI", ErrorKind.EMPTY_RESPONSE
            )

        logger.debug("OpenAI %s: %d chars", model, len(choice.message.content))
        return choice.message.content
