"""Gemini provider using google-genai SDK with native async."""

import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from config.config_loader import ProviderConfig
from src.models import ErrorKind
from src.providers.base import AIProvider, ProviderError, split_instruction

logger = logging.getLogger(__name__)

_AUTH_CODES = {401, 403}


class GeminiProvider(AIProvider):
    """Google Gemini provider via google-genai SDK.

    Gemini gets no separate system channel here: instruction and user
    content are re-joined with a blank line between them.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    def name(self) -> str:
        return self._config.name

    async def generate(self, model: str, prompt: str, api_key: str, timeout_sec: float) -> str:
        system_prompt, user_prompt = split_instruction(prompt)
        contents = f"{system_prompt}\n\n{user_prompt}" if user_prompt else system_prompt

        try:
            client = genai.Client(
                api_key=api_key,
                http_options=genai_types.HttpOptions(timeout=int(timeout_sec * 1000)),
            )
            response = await client.aio.models.generate_content(model=model, contents=contents)
        except genai_errors.APIError as exc:
            kind = ErrorKind.AUTH if exc.code in _AUTH_CODES else ErrorKind.TRANSPORT
            raise ProviderError(self.name(), f"error generating content: {exc}", kind) from exc
        except Exception as exc:
            raise ProviderError(self.name(), f"error generating content: {exc}") from exc

        if response is None:
            raise ProviderError(self.name(), "received nil result from Gemini API", ErrorKind.EMPTY_RESPONSE)
        if not response.text:
            raise ProviderError(self.name(), "empty response text from Gemini API", ErrorKind.EMPTY_RESPONSE)

        logger.debug("Gemini %s: %d chars", model, len(response.text))
        return response.text
