"""Shared test fixtures for aihooks."""

import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from aihooks.providers import ProviderRegistry

ClientFactory = Callable[..., httpx.AsyncClient]


def openai_payload(text: str | None) -> dict[str, Any]:
    """OpenAI-compatible chat completion body."""
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def claude_payload(text: str | None) -> dict[str, Any]:
    """Anthropic messages body."""
    return {"content": [{"type": "text", "text": text}]}


def gemini_payload(text: str | None) -> dict[str, Any]:
    """Gemini generateContent body."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body of a captured request."""
    return json.loads(request.content)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep AI_HOOK_* variables of the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("AI_HOOK_"):
            monkeypatch.delenv(name)


@pytest.fixture
def captured() -> list[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_client(captured: list[httpx.Request]) -> ClientFactory:
    """Build an AsyncClient whose transport answers every request the same way.

    Args (of the returned factory):
        status: HTTP status of the canned response
        json_body: JSON body of the canned response
        text: Raw body, used instead of json_body when given
        exc: httpx exception class raised instead of responding
    """

    def factory(
        status: int = 200,
        json_body: Any = None,
        *,
        text: str | None = None,
        exc: type[httpx.RequestError] | None = None,
    ) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            if exc is not None:
                raise exc("simulated transport failure", request=request)
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, json=json_body)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def registry() -> ProviderRegistry:
    """Empty registry without HTTP access."""
    return ProviderRegistry()
