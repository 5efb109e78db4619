"""CLI smoke tests for aihooks."""

import logging
from collections.abc import Iterator

import httpx
import pytest
from conftest import openai_payload
from typer.testing import CliRunner

from aihooks import ProviderId
from aihooks.cli import app
from aihooks.config import Settings
from aihooks.services import HookService
from aihooks.utils.logging import ROOT_LOGGER

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers bound to the runner's captured streams."""
    yield
    logging.getLogger(ROOT_LOGGER).handlers.clear()


@pytest.fixture
def mock_service(monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    """Route CLI provider calls through a mock transport.

    Returns:
        Requests seen by the transport
    """
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=openai_payload("Short summary"))

    original = HookService.from_settings

    def from_settings(settings: Settings, client: httpx.AsyncClient | None = None) -> HookService:
        return original(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    monkeypatch.setattr(HookService, "from_settings", staticmethod(from_settings))
    return seen


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_app_shows_help(self) -> None:
        """Test app shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "uniform interface" in result.output

    def test_version_flag(self) -> None:
        """Test --version flag shows version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "aihooks" in result.output

    def test_run_help(self) -> None:
        """Test run subcommand shows help."""
        result = runner.invoke(app, ["run", "--help"])
        assert result.exit_code == 0
        assert "--provider" in result.output

    def test_tasks(self) -> None:
        """Test tasks lists every task."""
        result = runner.invoke(app, ["tasks"])
        assert result.exit_code == 0
        for task in ("summarize", "translate", "code_review"):
            assert task in result.output


class TestProvidersCommand:
    """Test the providers command."""

    def test_no_keys(self) -> None:
        """Test listing fails without any configured key."""
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 1
        assert "No providers configured" in result.output

    def test_lists_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test configured providers are listed with their model."""
        monkeypatch.setenv("AI_HOOK_GROQ_KEY", "gsk-test")
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 0
        assert "groq" in result.output
        assert "llama-3.3-70b-versatile" in result.output

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a malformed AI_HOOK_* value is reported, not raised."""
        monkeypatch.setenv("AI_HOOK_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "AI_HOOK_LOG_LEVEL" in result.output

    def test_unknown_default_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a bad AI_HOOK_DEFAULT_PROVIDER is reported, not raised."""
        monkeypatch.setenv("AI_HOOK_GROQ_KEY", "gsk-test")
        monkeypatch.setenv("AI_HOOK_DEFAULT_PROVIDER", "mock")
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 1
        assert "UNSUPPORTED_PROVIDER" in result.output


class TestRunCommand:
    """Test the run command."""

    def test_run_task(
        self, monkeypatch: pytest.MonkeyPatch, mock_service: list[httpx.Request]
    ) -> None:
        """Test a task is answered by the configured provider."""
        monkeypatch.setenv("AI_HOOK_GROQ_KEY", "gsk-test")
        result = runner.invoke(app, ["run", "summarize", "Hello world"])
        assert result.exit_code == 0
        assert "Short summary" in result.output
        assert ProviderId.GROQ.value in result.output
        assert len(mock_service) == 1

    def test_run_without_keys(self, mock_service: list[httpx.Request]) -> None:
        """Test run fails with a classified error when nothing is configured."""
        result = runner.invoke(app, ["run", "summarize", "Hello world"])
        assert result.exit_code == 1
        assert mock_service == []

    def test_run_invalid_task(
        self, monkeypatch: pytest.MonkeyPatch, mock_service: list[httpx.Request]
    ) -> None:
        """Test an unknown task exits with an error."""
        monkeypatch.setenv("AI_HOOK_GROQ_KEY", "gsk-test")
        result = runner.invoke(app, ["run", "poem", "Hello world"])
        assert result.exit_code == 1
        assert mock_service == []
