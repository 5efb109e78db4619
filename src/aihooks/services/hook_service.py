"""Hook service - task invocation over the provider engine.

Single responsibility: turn caller text plus task options into a prompt,
resolve provider and model, await the provider call and wrap the answer in
a result envelope. Failures propagate as AIHookError; nothing is retried and
no placeholder output is ever returned.
"""

import functools
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..prompts.tasks import build_prompt, validate_task
from ..providers.catalog import ProviderId
from ..providers.errors import AIHookError, ErrorKind
from ..providers.registry import ProviderCredential, ProviderRegistry
from ..providers.selector import Selector
from ..utils.logging import get_logger
from ..validation.models import HookOptions, InitOptions, to_hook_error

logger = get_logger(__name__)


@dataclass(frozen=True)
class HookMeta:
    """Metadata of a successful call."""

    provider: ProviderId
    model: str
    latency_ms: int
    # Kept for API compatibility; no caching or cost estimation exists
    cached: bool = False
    estimated_cost_usd: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider.value,
            "model": self.model,
            "latencyMs": self.latency_ms,
            "cached": self.cached,
            "estimatedCostUSD": self.estimated_cost_usd,
        }


@dataclass(frozen=True)
class HookResult:
    """Result envelope of a successful call."""

    output: str
    meta: HookMeta

    def to_dict(self) -> dict[str, Any]:
        return {"output": self.output, "meta": self.meta.to_dict()}


def registry_from_settings(
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> ProviderRegistry:
    """Build a registry from environment settings.

    Args:
        settings: Loaded settings
        client: Optional shared HTTP client

    Returns:
        Initialized ProviderRegistry
    """
    registry = ProviderRegistry(client=client, timeout=settings.http_timeout)
    registry.initialize(settings.credentials(), settings.default_provider_id)
    return registry


class HookService:
    """Invocation facade.

    Usage:
        service = HookService.from_config(
            providers=[{"provider": "groq", "key": "gsk_..."}],
        )
        result = await service.run("Long article...", task="summarize")
        result.output, result.meta.provider
    """

    def __init__(self, registry: ProviderRegistry, selector: Selector | None = None) -> None:
        """Initialize HookService.

        Args:
            registry: Provider registry to resolve against
            selector: Custom selector; defaults to one over ``registry``
        """
        self._registry = registry
        self._selector = selector or Selector(registry)

    @classmethod
    def from_config(
        cls,
        providers: list[dict[str, Any] | ProviderCredential],
        default_provider: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> "HookService":
        """Build a service from ``{provider, key, default_model}`` records.

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER for unknown providers
        """
        records = [
            {"provider": p.provider, "key": p.key, "default_model": p.default_model}
            if isinstance(p, ProviderCredential)
            else p
            for p in providers
        ]
        try:
            options = InitOptions(providers=records, default_provider=default_provider)  # type: ignore[arg-type]
        except ValidationError as e:
            raise to_hook_error(e) from e

        registry = ProviderRegistry(client=client, timeout=timeout)
        registry.initialize(options.credentials(), options.default_provider)
        return cls(registry)

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> "HookService":
        """Build a service from environment settings."""
        return cls(registry_from_settings(settings, client=client))

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def selector(self) -> Selector:
        return self._selector

    async def run(
        self,
        text: str,
        task: str | None = None,
        provider: ProviderId | str | None = None,
        model: str | None = None,
        target_language: str | None = None,
        timeout: float | None = None,
    ) -> HookResult:
        """Run one task against the resolved provider.

        Args:
            text: Caller's input text
            task: Task name, or None to send the text unchanged
            provider: Optional provider hint; never silently overridden
            model: Optional model; else the provider's configured or built-in default
            target_language: Target language for translate
            timeout: Optional per-call deadline in seconds

        Returns:
            HookResult with output and metadata

        Raises:
            AIHookError: On invalid options, failed resolution or a failed call
        """
        options = self._validate(task, provider, model, target_language)
        prompt = build_prompt(options.task, text, options.target_language)
        resolution = self._selector.resolve(options.provider, options.model)

        start = time.perf_counter()
        try:
            output = await resolution.call(prompt, timeout=timeout)
        except AIHookError:
            raise
        except Exception as e:
            raise AIHookError(
                ErrorKind.UNKNOWN_ERROR,
                f"Unknown error calling provider: {e}",
                resolution.provider,
            ) from e
        latency_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "Task %s answered by %s/%s in %dms",
            options.task or "raw",
            resolution.provider.value,
            resolution.model,
            latency_ms,
        )
        return HookResult(
            output=output,
            meta=HookMeta(provider=resolution.provider, model=resolution.model, latency_ms=latency_ms),
        )

    def wrap(
        self,
        fn: Callable[..., str],
        task: str | None = None,
        provider: ProviderId | str | None = None,
        model: str | None = None,
        target_language: str | None = None,
    ) -> Callable[..., Awaitable[HookResult]]:
        """Turn a text-producing function into an async task call.

        The task is validated immediately, so a typo fails at wrap time
        rather than on first use.

        Args:
            fn: Function whose return value is the input text

        Returns:
            Async function with the same arguments as ``fn`` returning HookResult

        Raises:
            AIHookError: INVALID_TASK for unknown tasks
        """
        validate_task(task)
        options = self._validate(task, provider, model, target_language)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> HookResult:
            text = fn(*args, **kwargs)
            return await self.run(
                text,
                task=options.task,
                provider=options.provider,
                model=options.model,
                target_language=options.target_language,
            )

        return wrapper

    def _validate(
        self,
        task: str | None,
        provider: ProviderId | str | None,
        model: str | None,
        target_language: str | None,
    ) -> HookOptions:
        try:
            return HookOptions(
                task=task,  # type: ignore[arg-type]
                provider=provider,  # type: ignore[arg-type]
                model=model,
                target_language=target_language,
            )
        except ValidationError as e:
            raise to_hook_error(e) from e
