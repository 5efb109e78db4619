"""Input validation models using Pydantic."""

from .models import CredentialInput, HookOptions, InitOptions, to_hook_error

__all__ = [
    "CredentialInput",
    "HookOptions",
    "InitOptions",
    "to_hook_error",
]
