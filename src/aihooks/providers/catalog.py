"""Static provider catalog.

One immutable ProviderAdapterConfig per supported provider. Everything that
differs between providers (endpoint, auth style, request body, response path,
messages) lives here as data, so a single adapter class serves all of them.
New OpenAI-compatible providers only need a new entry in PROVIDER_CONFIGS.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import DEFAULT_MESSAGES, AIHookError, ErrorKind


class ProviderId(Enum):
    """Closed set of supported providers."""

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"
    GROQ = "groq"
    DEEPSEEK = "deepseek"
    MISTRAL = "mistral"
    XAI = "xai"
    PERPLEXITY = "perplexity"
    OPENROUTER = "openrouter"

    @classmethod
    def parse(cls, value: "ProviderId | str") -> "ProviderId":
        """Coerce a member or its string value into a ProviderId.

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER if the value is not in the set
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise AIHookError(
                ErrorKind.UNSUPPORTED_PROVIDER,
                f"Unsupported provider: {value}. Supported providers are: {valid}",
                None,
                "Use one of the supported provider names.",
            ) from None


class AuthStyle(Enum):
    """How the secret key travels with a request."""

    BEARER = "bearer"  # Authorization: Bearer <key>
    HEADER = "header"  # custom header carrying the raw key
    QUERY = "query"  # ?key=<key>, no auth header


PREFERRED_PROVIDER = ProviderId.OPENROUTER

DISPLAY_NAMES: Mapping[ProviderId, str] = MappingProxyType(
    {
        ProviderId.OPENAI: "OpenAI",
        ProviderId.CLAUDE: "Claude",
        ProviderId.GEMINI: "Gemini",
        ProviderId.GROQ: "Groq",
        ProviderId.DEEPSEEK: "DeepSeek",
        ProviderId.MISTRAL: "Mistral",
        ProviderId.XAI: "xAI",
        ProviderId.PERPLEXITY: "Perplexity",
        ProviderId.OPENROUTER: "OpenRouter",
    }
)

DEFAULT_MODELS: Mapping[ProviderId, str] = MappingProxyType(
    {
        ProviderId.OPENAI: "gpt-4.1",
        ProviderId.CLAUDE: "claude-sonnet-4-20250514",
        ProviderId.GEMINI: "gemini-2.5-flash",
        ProviderId.GROQ: "llama-3.3-70b-versatile",
        ProviderId.DEEPSEEK: "deepseek-chat",
        ProviderId.MISTRAL: "mistral-small-latest",
        ProviderId.XAI: "grok-4-fast-non-reasoning",
        ProviderId.PERPLEXITY: "sonar",
        ProviderId.OPENROUTER: "openai/gpt-4o-mini",
    }
)

ANTHROPIC_VERSION = "2023-06-01"
CLAUDE_MAX_TOKENS = 4096

JSON_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


# ---------------------------------------------------------------------------
# Request body builders
# ---------------------------------------------------------------------------


def openai_style_body(prompt: str, model: str) -> dict[str, Any]:
    return {"model": model, "messages": [{"role": "user", "content": prompt}]}


def claude_style_body(prompt: str, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "max_tokens": CLAUDE_MAX_TOKENS,
        "messages": [{"role": "user", "content": prompt}],
    }


def gemini_style_body(prompt: str, model: str) -> dict[str, Any]:
    # Gemini carries the model in the URL, not the body
    return {"contents": [{"parts": [{"text": prompt}]}]}


# ---------------------------------------------------------------------------
# Response parsers
# ---------------------------------------------------------------------------


def _dig(payload: Any, *path: str | int) -> Any:
    """Walk a nested JSON structure, returning None on any missing step."""
    node = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict) or step not in node:
            return None
        node = node[step]
    return node


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def openai_style_text(payload: Any) -> str | None:
    return _as_text(_dig(payload, "choices", 0, "message", "content"))


def claude_style_text(payload: Any) -> str | None:
    return _as_text(_dig(payload, "content", 0, "text"))


def gemini_style_text(payload: Any) -> str | None:
    return _as_text(_dig(payload, "candidates", 0, "content", "parts", 0, "text"))


# ---------------------------------------------------------------------------
# Adapter config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderAdapterConfig:
    """Immutable wire description of one provider."""

    provider: ProviderId
    url_template: str
    env_key: str
    build_body: Callable[[str, str], dict[str, Any]]
    parse_text: Callable[[Any], str | None]
    auth_style: AuthStyle = AuthStyle.BEARER
    auth_header: str = "Authorization"
    static_headers: Mapping[str, str] = field(default_factory=lambda: JSON_HEADERS)
    messages: Mapping[ErrorKind, str] = field(default_factory=lambda: DEFAULT_MESSAGES)

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self.provider]

    @property
    def default_model(self) -> str | None:
        return DEFAULT_MODELS.get(self.provider)

    def build_url(self, model: str) -> str:
        """Endpoint for a call, interpolating the model where the provider needs it."""
        return self.url_template.format(model=model)

    def auth_headers(self, key: str) -> dict[str, str]:
        """Headers carrying the key, according to the auth style."""
        if self.auth_style is AuthStyle.BEARER:
            return {self.auth_header: f"Bearer {key}"}
        if self.auth_style is AuthStyle.HEADER:
            return {self.auth_header: key}
        return {}

    def auth_params(self, key: str) -> dict[str, str]:
        """Query parameters carrying the key, according to the auth style."""
        if self.auth_style is AuthStyle.QUERY:
            return {"key": key}
        return {}

    def headers(self, key: str) -> dict[str, str]:
        """Static headers merged with auth headers."""
        return {**self.static_headers, **self.auth_headers(key)}

    def message(self, kind: ErrorKind, text: str = "") -> str:
        """Render the message template for an error kind."""
        template = self.messages.get(kind) or DEFAULT_MESSAGES[ErrorKind.UNKNOWN_ERROR]
        return template.format(name=self.display_name, text=text)


def _openai_compatible(provider: ProviderId, url: str) -> ProviderAdapterConfig:
    return ProviderAdapterConfig(
        provider=provider,
        url_template=url,
        env_key=f"AI_HOOK_{provider.value.upper()}_KEY",
        build_body=openai_style_body,
        parse_text=openai_style_text,
    )


PROVIDER_CONFIGS: Mapping[ProviderId, ProviderAdapterConfig] = MappingProxyType(
    {
        ProviderId.OPENAI: _openai_compatible(
            ProviderId.OPENAI, "https://api.openai.com/v1/chat/completions"
        ),
        ProviderId.CLAUDE: ProviderAdapterConfig(
            provider=ProviderId.CLAUDE,
            url_template="https://api.anthropic.com/v1/messages",
            env_key="AI_HOOK_CLAUDE_KEY",
            build_body=claude_style_body,
            parse_text=claude_style_text,
            auth_style=AuthStyle.HEADER,
            auth_header="x-api-key",
            static_headers=MappingProxyType(
                {**JSON_HEADERS, "anthropic-version": ANTHROPIC_VERSION}
            ),
        ),
        ProviderId.GEMINI: ProviderAdapterConfig(
            provider=ProviderId.GEMINI,
            url_template=(
                "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
            ),
            env_key="AI_HOOK_GEMINI_KEY",
            build_body=gemini_style_body,
            parse_text=gemini_style_text,
            auth_style=AuthStyle.QUERY,
        ),
        ProviderId.GROQ: _openai_compatible(
            ProviderId.GROQ, "https://api.groq.com/openai/v1/chat/completions"
        ),
        ProviderId.DEEPSEEK: _openai_compatible(
            ProviderId.DEEPSEEK, "https://api.deepseek.com/v1/chat/completions"
        ),
        ProviderId.MISTRAL: _openai_compatible(
            ProviderId.MISTRAL, "https://api.mistral.ai/v1/chat/completions"
        ),
        ProviderId.XAI: _openai_compatible(ProviderId.XAI, "https://api.x.ai/v1/chat/completions"),
        ProviderId.PERPLEXITY: _openai_compatible(
            ProviderId.PERPLEXITY, "https://api.perplexity.ai/chat/completions"
        ),
        ProviderId.OPENROUTER: _openai_compatible(
            ProviderId.OPENROUTER, "https://openrouter.ai/api/v1/chat/completions"
        ),
    }
)


def get_config(provider: ProviderId | str) -> ProviderAdapterConfig:
    """Look up the adapter config for a provider.

    Raises:
        AIHookError: UNSUPPORTED_PROVIDER for unknown providers
    """
    return PROVIDER_CONFIGS[ProviderId.parse(provider)]
