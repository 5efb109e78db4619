"""Error taxonomy for provider calls.

Every failure inside aihooks surfaces as an AIHookError carrying a stable
kind, a human message, the provider involved and an optional remediation
hint. Classification of HTTP failures is a pure function of the status code
and the provider's message templates.
"""

import json
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from .catalog import ProviderAdapterConfig, ProviderId


class ErrorKind(Enum):
    """Stable error kinds exposed to callers."""

    INVALID_CREDENTIAL = "INVALID_API_KEY"
    BAD_REQUEST = "BAD_REQUEST"
    MODEL_NOT_ALLOWED = "MODEL_NOT_ALLOWED"
    RATE_LIMITED = "RATE_LIMIT"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NO_PROVIDER_FOUND = "NO_PROVIDER_FOUND"
    PROVIDER_NOT_AVAILABLE = "PROVIDER_NOT_AVAILABLE"
    NO_MODEL_FOUND = "NO_MODEL_FOUND"
    UNSUPPORTED_PROVIDER = "UNSUPPORTED_PROVIDER"
    INVALID_TASK = "INVALID_TASK"


class AIHookError(Exception):
    """Classified failure raised by every aihooks operation.

    Attributes:
        kind: Error category
        message: Human-readable message, embedding the provider's raw error text
        provider: Provider involved, if any
        hint: Suggested remediation, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        provider: "ProviderId | None" = None,
        hint: str | None = None,
    ) -> None:
        if not message:
            message = "Unknown error occurred"
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.provider = provider
        self.hint = hint

    def pretty(self) -> str:
        """Render kind, message, provider and hint for humans."""
        lines = [f"AI-HOOK ERROR [{self.kind.value}]: {self.message}"]
        if self.provider is not None:
            lines.append(f"   Provider: {self.provider.value}")
        if self.hint:
            lines.append(f"   Suggestion: {self.hint}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Expose the error fields for a presentation layer."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "provider": self.provider.value if self.provider is not None else None,
            "hint": self.hint,
        }

    def __repr__(self) -> str:
        return f"AIHookError(kind={self.kind.name}, message={self.message!r}, provider={self.provider})"


# Message templates; {name} is the display name, {text} the provider's raw error
DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_CREDENTIAL: "Invalid {name} API key: {text}",
    ErrorKind.BAD_REQUEST: "{name} rejected the request: {text}",
    ErrorKind.MODEL_NOT_ALLOWED: "Your API key cannot access this model: {text}",
    ErrorKind.RATE_LIMITED: "Too many requests to {name}: {text}",
    ErrorKind.PROVIDER_ERROR: "{name} API error: {text}",
    ErrorKind.NETWORK_ERROR: "Network error while contacting {name}",
    ErrorKind.UNKNOWN_ERROR: "Unknown error occurred",
}

MISSING_KEY_MESSAGE = "Missing {name} API key."
EMPTY_RESPONSE_MESSAGE = "{name} returned empty response"

STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.INVALID_CREDENTIAL,
    403: ErrorKind.MODEL_NOT_ALLOWED,
    429: ErrorKind.RATE_LIMITED,
}

STATUS_HINTS: dict[ErrorKind, str] = {
    ErrorKind.BAD_REQUEST: "Check your prompt and model",
    ErrorKind.MODEL_NOT_ALLOWED: "Try a different model or check API key permissions",
    ErrorKind.RATE_LIMITED: "Throttle requests or upgrade your plan",
    ErrorKind.PROVIDER_ERROR: "Check the provider status and your request",
}


def raw_error_text(response: httpx.Response) -> str:
    """Extract the provider's raw error text from a failed response.

    Uses the compact JSON of the body's ``error`` member when present, else
    the HTTP reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return json.dumps(body["error"], separators=(",", ":"), ensure_ascii=False)
    return response.reason_phrase or "Unknown error"


def classify_status(status: int, text: str, config: "ProviderAdapterConfig") -> AIHookError:
    """Map an HTTP error status to a classified error.

    Args:
        status: HTTP status code (4xx/5xx)
        text: Raw error text returned by the provider
        config: Adapter config of the provider that failed

    Returns:
        AIHookError for the status
    """
    kind = STATUS_KINDS.get(status, ErrorKind.PROVIDER_ERROR)
    message = config.message(kind, text=text)

    if kind is ErrorKind.INVALID_CREDENTIAL:
        hint = f"Verify your {config.env_key} credential"
    else:
        hint = STATUS_HINTS[kind]

    return AIHookError(kind, message, config.provider, hint)


def missing_credential(config: "ProviderAdapterConfig") -> AIHookError:
    """Error for an adapter called without a bound key."""
    return AIHookError(
        ErrorKind.INVALID_CREDENTIAL,
        MISSING_KEY_MESSAGE.format(name=config.display_name),
        config.provider,
        f"Register a key for '{config.provider.value}' or set {config.env_key}.",
    )


def empty_response(config: "ProviderAdapterConfig") -> AIHookError:
    """Error for a response without extractable text."""
    return AIHookError(
        ErrorKind.PROVIDER_ERROR,
        EMPTY_RESPONSE_MESSAGE.format(name=config.display_name),
        config.provider,
        "Check your model and API key",
    )


def classify_exception(exc: BaseException, config: "ProviderAdapterConfig") -> AIHookError:
    """Classify an exception raised while talking to a provider.

    Already-classified errors pass through unchanged. Transport failures with
    no response become NETWORK_ERROR; anything else is UNKNOWN_ERROR.
    """
    if isinstance(exc, AIHookError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(
            exc.response.status_code, raw_error_text(exc.response), config
        )

    if isinstance(exc, httpx.RequestError):
        return AIHookError(
            ErrorKind.NETWORK_ERROR,
            config.message(ErrorKind.NETWORK_ERROR),
            config.provider,
            "Check your internet connection",
        )

    return AIHookError(
        ErrorKind.UNKNOWN_ERROR,
        str(exc) or config.message(ErrorKind.UNKNOWN_ERROR),
        config.provider,
    )
