"""Input validation models using Pydantic.

These models validate caller-supplied configuration and per-call options
before they reach the provider engine, and translate validation failures
into the aihooks error taxonomy.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..prompts.tasks import TaskType, normalize_task, validate_task
from ..providers.catalog import ProviderId
from ..providers.errors import AIHookError, ErrorKind
from ..providers.registry import ProviderCredential


def _normalize_provider(v: Any) -> Any:
    """Lower-case and strip provider names before enum validation."""
    if isinstance(v, str):
        v = v.strip().lower()
        return v or None
    return v


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class CredentialInput(BaseModel):
    """Validated provider credential record."""

    # Unknown keys fail instead of being dropped
    model_config = ConfigDict(extra="forbid")

    provider: ProviderId = Field(description="Provider identifier")
    key: str = Field(default="", description="Secret API key", repr=False)
    default_model: str | None = Field(
        default=None,
        description="Model used when none is passed",
        validation_alias=AliasChoices("default_model", "defaultModel"),
    )

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: Any) -> Any:
        """Accept provider names in any case."""
        return _normalize_provider(v)

    @field_validator("default_model", mode="before")
    @classmethod
    def blank_model_to_none(cls, v: Any) -> Any:
        """Treat an empty default model as unset."""
        return _blank_to_none(v)

    @field_validator("key", mode="before")
    @classmethod
    def strip_key(cls, v: Any) -> Any:
        """Strip surrounding whitespace copied along with keys."""
        return v.strip() if isinstance(v, str) else v

    def to_credential(self) -> ProviderCredential:
        return ProviderCredential(self.provider, self.key, self.default_model)


class InitOptions(BaseModel):
    """Validated registry initialization options."""

    providers: list[CredentialInput] = Field(default_factory=list)
    default_provider: ProviderId | None = None

    @field_validator("default_provider", mode="before")
    @classmethod
    def normalize_default_provider(cls, v: Any) -> Any:
        return _normalize_provider(v)

    def credentials(self) -> list[ProviderCredential]:
        return [p.to_credential() for p in self.providers]


class HookOptions(BaseModel):
    """Validated options of one task invocation."""

    task: TaskType | None = None
    provider: ProviderId | None = None
    model: str | None = None
    target_language: str | None = None

    @field_validator("task", mode="before")
    @classmethod
    def canonical_task(cls, v: Any) -> Any:
        """Accept alternate task spellings such as codeReview."""
        return normalize_task(v) if isinstance(v, str) else v

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: Any) -> Any:
        return _normalize_provider(v)

    @field_validator("model", "target_language", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings as unset."""
        return _blank_to_none(v)


def to_hook_error(exc: ValidationError) -> AIHookError:
    """Translate a Pydantic validation failure into an AIHookError.

    Provider fields map to UNSUPPORTED_PROVIDER, the task field to
    INVALID_TASK; anything else, including a missing field, is reported as
    BAD_REQUEST. Only string inputs are echoed: the input of a missing
    field is the whole record, secret key included.
    """
    error = exc.errors()[0]
    loc = [str(part) for part in error.get("loc", ())]
    value = error.get("input")
    echoable = error.get("type") != "missing" and isinstance(value, str)

    if echoable and "task" in loc:
        try:
            validate_task(value)
        except AIHookError as task_error:
            return task_error

    if echoable and ("provider" in loc or "default_provider" in loc):
        try:
            ProviderId.parse(value)
        except AIHookError as provider_error:
            return provider_error

    return AIHookError(
        ErrorKind.BAD_REQUEST,
        f"Invalid options ({'.'.join(loc) or 'input'}): {error.get('msg', 'invalid value')}",
        None,
        "Check the options passed to aihooks.",
    )
