"""Tests for the static provider catalog."""

import pytest

from aihooks.providers import (
    DEFAULT_MODELS,
    DISPLAY_NAMES,
    PREFERRED_PROVIDER,
    PROVIDER_CONFIGS,
    AIHookError,
    AuthStyle,
    ErrorKind,
    ProviderId,
    get_config,
)
from aihooks.providers.catalog import (
    claude_style_text,
    gemini_style_text,
    openai_style_text,
)

OPENAI_COMPATIBLE = [
    ProviderId.OPENAI,
    ProviderId.GROQ,
    ProviderId.DEEPSEEK,
    ProviderId.MISTRAL,
    ProviderId.XAI,
    ProviderId.PERPLEXITY,
    ProviderId.OPENROUTER,
]


class TestProviderId:
    """Test provider identifier parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("groq", ProviderId.GROQ),
            ("  OpenRouter ", ProviderId.OPENROUTER),
            (ProviderId.XAI, ProviderId.XAI),
        ],
        ids=["plain", "case-and-space", "member"],
    )
    def test_parse(self, value: str | ProviderId, expected: ProviderId) -> None:
        assert ProviderId.parse(value) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(AIHookError) as exc_info:
            ProviderId.parse("mock")
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_PROVIDER
        assert "mock" in exc_info.value.message

    def test_closed_set(self) -> None:
        assert {p.value for p in ProviderId} == {
            "openai",
            "claude",
            "gemini",
            "groq",
            "deepseek",
            "mistral",
            "xai",
            "perplexity",
            "openrouter",
        }


class TestCatalogTables:
    """Test every provider is fully described."""

    @pytest.mark.parametrize("provider", list(ProviderId), ids=lambda p: p.value)
    def test_config_complete(self, provider: ProviderId) -> None:
        config = PROVIDER_CONFIGS[provider]
        assert config.provider is provider
        assert config.url_template.startswith("https://")
        assert config.env_key == f"AI_HOOK_{provider.value.upper()}_KEY"
        assert DEFAULT_MODELS[provider]
        assert config.default_model == DEFAULT_MODELS[provider]
        assert DISPLAY_NAMES[provider] == config.display_name

    def test_display_names(self) -> None:
        assert DISPLAY_NAMES[ProviderId.OPENAI] == "OpenAI"
        assert DISPLAY_NAMES[ProviderId.XAI] == "xAI"
        assert DISPLAY_NAMES[ProviderId.DEEPSEEK] == "DeepSeek"
        assert DISPLAY_NAMES[ProviderId.OPENROUTER] == "OpenRouter"

    def test_preferred_provider(self) -> None:
        assert PREFERRED_PROVIDER is ProviderId.OPENROUTER

    def test_get_config_by_name(self) -> None:
        assert get_config("claude") is PROVIDER_CONFIGS[ProviderId.CLAUDE]

    def test_tables_are_immutable(self) -> None:
        with pytest.raises(TypeError):
            PROVIDER_CONFIGS[ProviderId.GROQ] = PROVIDER_CONFIGS[ProviderId.OPENAI]  # type: ignore[index]


class TestWireShapes:
    """Test request construction data per provider family."""

    @pytest.mark.parametrize("provider", OPENAI_COMPATIBLE, ids=lambda p: p.value)
    def test_openai_compatible(self, provider: ProviderId) -> None:
        config = PROVIDER_CONFIGS[provider]
        assert config.auth_style is AuthStyle.BEARER
        assert config.headers("k1") == {
            "Content-Type": "application/json",
            "Authorization": "Bearer k1",
        }
        assert config.auth_params("k1") == {}
        assert config.build_body("hi", "m") == {
            "model": "m",
            "messages": [{"role": "user", "content": "hi"}],
        }
        assert config.build_url("m") == config.url_template

    def test_claude(self) -> None:
        config = PROVIDER_CONFIGS[ProviderId.CLAUDE]
        assert config.build_url("m") == "https://api.anthropic.com/v1/messages"
        assert config.headers("k1") == {
            "Content-Type": "application/json",
            "anthropic-version": "2023-06-01",
            "x-api-key": "k1",
        }
        assert config.build_body("hi", "m") == {
            "model": "m",
            "max_tokens": 4096,
            "messages": [{"role": "user", "content": "hi"}],
        }

    def test_gemini(self) -> None:
        config = PROVIDER_CONFIGS[ProviderId.GEMINI]
        assert config.build_url("gemini-2.5-flash") == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-2.5-flash:generateContent"
        )
        assert config.headers("k1") == {"Content-Type": "application/json"}
        assert config.auth_params("k1") == {"key": "k1"}
        assert config.build_body("hi", "m") == {"contents": [{"parts": [{"text": "hi"}]}]}

    @pytest.mark.parametrize(
        "url",
        [
            "https://api.openai.com/v1/chat/completions",
            "https://api.groq.com/openai/v1/chat/completions",
            "https://api.deepseek.com/v1/chat/completions",
            "https://api.mistral.ai/v1/chat/completions",
            "https://api.x.ai/v1/chat/completions",
            "https://api.perplexity.ai/chat/completions",
            "https://openrouter.ai/api/v1/chat/completions",
        ],
    )
    def test_endpoints(self, url: str) -> None:
        assert url in {c.url_template for c in PROVIDER_CONFIGS.values()}


class TestResponseParsers:
    """Test text extraction from provider responses."""

    def test_openai_style(self) -> None:
        assert openai_style_text({"choices": [{"message": {"content": "X"}}]}) == "X"

    def test_claude_style(self) -> None:
        assert claude_style_text({"content": [{"type": "text", "text": "X"}]}) == "X"

    def test_gemini_style(self) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": "X"}]}}]}
        assert gemini_style_text(payload) == "X"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"choices": []},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": ""}}]},
            {"choices": [{"message": {"content": None}}]},
            {"choices": "oops"},
            [],
            None,
        ],
        ids=["empty", "no-choices", "no-content", "blank", "null", "wrong-type", "list", "none"],
    )
    def test_absent_text(self, payload: object) -> None:
        assert openai_style_text(payload) is None
