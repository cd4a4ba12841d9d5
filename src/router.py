"""Dispatch router: model identifier -> (provider adapter, credential)."""

import logging
from collections.abc import Iterable

from config.config_loader import Credentials
from src.models import ModelSpec, ProviderKind
from src.providers.base import AIProvider

logger = logging.getLogger(__name__)

# Unrecognized model identifiers are sent to this provider with its credential.
FALLBACK_PROVIDER = ProviderKind.OPENAI


class Router:
    """Static lookup from model identifier to adapter and API key."""

    def __init__(
        self,
        specs: Iterable[ModelSpec],
        providers: dict[ProviderKind, AIProvider],
        credentials: Credentials,
    ) -> None:
        self._kinds = {spec.model: spec.provider for spec in specs}
        self._providers = providers
        self._credentials = credentials

    def kind_for(self, model: str) -> ProviderKind:
        kind = self._kinds.get(model)
        if kind is None:
            logger.debug("Unknown model %s, routing to %s", model, FALLBACK_PROVIDER.value)
            return FALLBACK_PROVIDER
        return kind

    def resolve(self, model: str) -> tuple[AIProvider, str]:
        kind = self.kind_for(model)
        return self._providers[kind], self._credentials.for_kind(kind)
