"""Provider abstraction and selection engine.

Provides a uniform async call over several LLM HTTP APIs:
- catalog: static per-provider wire configuration
- adapter: one adapter class driven by that configuration
- registry: configured providers and their credentials
- selector: deterministic provider/model resolution
- errors: the classified error taxonomy
"""

from .adapter import ProviderAdapter
from .catalog import (
    DEFAULT_MODELS,
    DISPLAY_NAMES,
    PREFERRED_PROVIDER,
    PROVIDER_CONFIGS,
    AuthStyle,
    ProviderAdapterConfig,
    ProviderId,
    get_config,
)
from .errors import AIHookError, ErrorKind, classify_exception, classify_status
from .registry import ProviderCredential, ProviderRegistry, RegistryEntry
from .selector import Resolution, Selector

__all__ = [
    "AIHookError",
    "AuthStyle",
    "DEFAULT_MODELS",
    "DISPLAY_NAMES",
    "ErrorKind",
    "PREFERRED_PROVIDER",
    "PROVIDER_CONFIGS",
    "ProviderAdapter",
    "ProviderAdapterConfig",
    "ProviderCredential",
    "ProviderId",
    "ProviderRegistry",
    "RegistryEntry",
    "Resolution",
    "Selector",
    "classify_exception",
    "classify_status",
    "get_config",
]
