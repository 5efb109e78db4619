"""Service layer for aihooks.

- HookService: task invocation facade over the provider engine
- HookResult / HookMeta: the success envelope
"""

from .hook_service import HookMeta, HookResult, HookService, registry_from_settings

__all__ = [
    "HookMeta",
    "HookResult",
    "HookService",
    "registry_from_settings",
]
