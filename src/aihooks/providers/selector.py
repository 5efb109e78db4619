"""Provider and model resolution.

Turns an optional provider hint and an optional model hint into exactly one
registered provider and a concrete model, or fails with a classified error.
Resolution happens before any network call; there is no fallback after a
call has failed.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .catalog import DEFAULT_MODELS, PREFERRED_PROVIDER, ProviderId
from .errors import AIHookError, ErrorKind
from .registry import ProviderRegistry, RegistryEntry

logger = logging.getLogger(__name__)

ProviderCall = Callable[..., Awaitable[str]]

NO_PROVIDER_MESSAGE = (
    "No valid AI provider API key was found. "
    "At least one provider must be registered with a non-empty key."
)
NO_PROVIDER_HINT = (
    "Register a credential with ProviderRegistry.register() or set one of the "
    "AI_HOOK_<PROVIDER>_KEY environment variables (e.g. AI_HOOK_OPENROUTER_KEY)."
)


@dataclass(frozen=True)
class Resolution:
    """A resolved provider entry plus the model to call it with."""

    entry: RegistryEntry
    model: str

    @property
    def provider(self) -> ProviderId:
        return self.entry.provider

    async def call(self, prompt: str, timeout: float | None = None) -> str:
        return await self.entry.call(prompt, self.model, timeout=timeout)


class Selector:
    """Deterministic provider/model selection over a registry."""

    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def select(self, provider: ProviderId | str | None = None) -> RegistryEntry:
        """Pick the provider that answers a call.

        Order: explicit hint, configured default, preferred provider, first
        registered. An explicit hint is never overridden: if it names a
        provider without a key, selection fails.

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER, PROVIDER_NOT_AVAILABLE or
                NO_PROVIDER_FOUND
        """
        available = self._registry.available_providers()

        if provider:
            hinted = ProviderId.parse(provider)
            if hinted not in available:
                raise AIHookError(
                    ErrorKind.PROVIDER_NOT_AVAILABLE,
                    f"Provider '{hinted.value}' was requested but has no registered credential.",
                    hinted,
                    f"Register a key for '{hinted.value}' or omit the provider to auto-select.",
                )
            return self._entry(hinted)

        default = self._registry.default_provider
        if default is not None and default in available:
            return self._entry(default)

        if PREFERRED_PROVIDER in available:
            return self._entry(PREFERRED_PROVIDER)

        if available:
            # available_providers() keeps registration order after the preferred one
            return self._entry(available[0])

        raise AIHookError(ErrorKind.NO_PROVIDER_FOUND, NO_PROVIDER_MESSAGE, None, NO_PROVIDER_HINT)

    def resolve_model(self, entry: RegistryEntry, model: str | None = None) -> str:
        """Pick the model: explicit, then credential default, then built-in default.

        Raises:
            AIHookError: NO_MODEL_FOUND if no source yields a model
        """
        resolved = model or entry.credential.default_model or DEFAULT_MODELS.get(entry.provider)
        if not resolved:
            raise AIHookError(
                ErrorKind.NO_MODEL_FOUND,
                f"No model found for provider '{entry.provider.value}'.",
                entry.provider,
                "Pass a model explicitly or register the provider with a default model.",
            )
        return resolved

    def resolve(
        self,
        provider: ProviderId | str | None = None,
        model: str | None = None,
    ) -> Resolution:
        """Resolve provider and model for one call."""
        entry = self.select(provider)
        resolved_model = self.resolve_model(entry, model)
        logger.debug("Selected provider=%s model=%s", entry.provider.value, resolved_model)
        return Resolution(entry=entry, model=resolved_model)

    def select_provider(
        self, name_hint: ProviderId | str | None = None
    ) -> tuple[ProviderCall, ProviderId]:
        """Return a call function for the selected provider and its id.

        The function takes ``(prompt, model=None)`` and resolves the model on
        each call.
        """
        entry = self.select(name_hint)

        async def call(prompt: str, model: str | None = None) -> str:
            return await entry.call(prompt, self.resolve_model(entry, model))

        return call, entry.provider

    def _entry(self, provider: ProviderId) -> RegistryEntry:
        entry = self._registry.get(provider)
        if entry is None:
            # Removed between the availability snapshot and the lookup
            raise AIHookError(
                ErrorKind.PROVIDER_NOT_AVAILABLE,
                f"Provider '{provider.value}' is no longer registered.",
                provider,
                f"Register a key for '{provider.value}'.",
            )
        return entry
