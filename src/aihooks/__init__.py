"""aihooks - one async call signature over many LLM provider APIs."""

from .providers import (
    AIHookError,
    ErrorKind,
    ProviderCredential,
    ProviderId,
    ProviderRegistry,
    Selector,
)
from .services import HookMeta, HookResult, HookService

__version__ = "0.1.0"

__all__ = [
    "AIHookError",
    "ErrorKind",
    "HookMeta",
    "HookResult",
    "HookService",
    "ProviderCredential",
    "ProviderId",
    "ProviderRegistry",
    "Selector",
    "__version__",
]
