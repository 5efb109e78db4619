"""Provider registry.

Owns the configured providers: one entry per ProviderId, holding the
credential, the adapter bound to it and the provider's static config.
The registry is an explicit object passed to whoever needs it; create one
per application (or per test) and call reset() to clear it.

Usage:
    registry = ProviderRegistry()
    registry.initialize(
        [ProviderCredential(ProviderId.GROQ, "gsk_...")],
        default_provider="groq",
    )
    registry.available_providers()  # [ProviderId.GROQ]
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx

from .adapter import ProviderAdapter
from .catalog import PREFERRED_PROVIDER, PROVIDER_CONFIGS, ProviderAdapterConfig, ProviderId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderCredential:
    """Secret key and optional default model for one provider."""

    provider: ProviderId
    key: str = field(repr=False)
    default_model: str | None = None

    def __post_init__(self) -> None:
        # Accept plain strings for the provider
        object.__setattr__(self, "provider", ProviderId.parse(self.provider))

    @property
    def is_available(self) -> bool:
        return bool(self.key and self.key.strip())


@dataclass(frozen=True)
class RegistryEntry:
    """A registered provider: credential, bound adapter and config."""

    credential: ProviderCredential
    adapter: ProviderAdapter
    config: ProviderAdapterConfig

    @property
    def provider(self) -> ProviderId:
        return self.credential.provider

    async def call(self, prompt: str, model: str, timeout: float | None = None) -> str:
        return await self.adapter.call(prompt, model, timeout=timeout)


class ProviderRegistry:
    """Registry of configured providers.

    Mutations and reads are serialized by a re-entrant lock, so registration
    from one thread never tears a concurrent resolution in another.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Create an empty registry.

        Args:
            client: HTTP client shared by every adapter built by this registry
            timeout: Request timeout passed to every adapter
        """
        self._client = client
        self._timeout = timeout
        self._entries: dict[ProviderId, RegistryEntry] = {}
        self._default_provider: ProviderId | None = None
        self._initialized = False
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self,
        credentials: Iterable[ProviderCredential],
        default_provider: ProviderId | str | None = None,
    ) -> None:
        """Replace the whole configured set.

        Args:
            credentials: Credential records, registered in order
            default_provider: Provider preferred when the caller gives no hint

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER for unknown providers
        """
        default = ProviderId.parse(default_provider) if default_provider else None
        entries = [self._build_entry(credential) for credential in credentials]

        with self._lock:
            self._entries = {}
            for entry in entries:
                self._entries[entry.provider] = entry
            self._default_provider = default
            self._initialized = True
            names = ", ".join(p.value for p in self._entries) or "none"

        logger.info(
            "Initialized providers: %s (default: %s)",
            names,
            default.value if default else "none",
        )

    def reset(self) -> None:
        """Clear every registration and the default provider."""
        with self._lock:
            self._entries.clear()
            self._default_provider = None
            self._initialized = False
        logger.debug("Provider registry reset")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def default_provider(self) -> ProviderId | None:
        return self._default_provider

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        credential: ProviderCredential | ProviderId | str,
        key: str | None = None,
        default_model: str | None = None,
    ) -> RegistryEntry:
        """Insert or replace a provider registration.

        Accepts either a ProviderCredential or a provider plus key.

        Returns:
            The new registry entry

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER for unknown providers
        """
        if not isinstance(credential, ProviderCredential):
            credential = ProviderCredential(credential, key or "", default_model)  # type: ignore[arg-type]

        entry = self._build_entry(credential)
        with self._lock:
            if entry.provider in self._entries:
                logger.info("Replacing provider: %s", entry.provider.value)
            self._entries[entry.provider] = entry
            self._initialized = True

        logger.info("Registered provider: %s", entry.provider.value)
        return entry

    def remove(self, provider: ProviderId | str) -> None:
        """Remove a provider; removing an absent provider is a no-op."""
        provider_id = ProviderId.parse(provider)
        with self._lock:
            removed = self._entries.pop(provider_id, None)
        if removed is not None:
            logger.info("Removed provider: %s", provider_id.value)

    def _build_entry(self, credential: ProviderCredential) -> RegistryEntry:
        config = PROVIDER_CONFIGS[credential.provider]
        key = credential.key
        adapter = ProviderAdapter(
            config,
            key_source=lambda: key,
            client=self._client,
            timeout=self._timeout,
        )
        return RegistryEntry(credential=credential, adapter=adapter, config=config)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, provider: ProviderId | str) -> RegistryEntry | None:
        """Get the entry for a provider, or None if not registered."""
        provider_id = ProviderId.parse(provider)
        with self._lock:
            return self._entries.get(provider_id)

    def available_providers(self) -> list[ProviderId]:
        """Providers with a non-empty key.

        The preferred provider comes first when available; the rest follow
        registration order.
        """
        with self._lock:
            available = [p for p, e in self._entries.items() if e.credential.is_available]

        if PREFERRED_PROVIDER in available:
            available.remove(PREFERRED_PROVIDER)
            available.insert(0, PREFERRED_PROVIDER)
        return available

    def is_available(self, provider: ProviderId) -> bool:
        entry = self.get(provider)
        return entry is not None and entry.credential.is_available

    def list_providers(self) -> list[ProviderId]:
        """All registered providers in registration order, available or not."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, provider: object) -> bool:
        with self._lock:
            return provider in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
