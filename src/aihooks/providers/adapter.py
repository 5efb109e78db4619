"""Provider adapter: generic (prompt, model) in, text out.

A single ProviderAdapter class serves every provider; the per-provider wire
differences come from its ProviderAdapterConfig. The key is read through an
accessor bound at construction, so one adapter exists per registered
credential and the adapter itself never touches the environment.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from .catalog import ProviderAdapterConfig, ProviderId
from .errors import (
    AIHookError,
    classify_exception,
    classify_status,
    empty_response,
    missing_credential,
    raw_error_text,
)

logger = logging.getLogger(__name__)

KeySource = Callable[[], str | None]


class ProviderAdapter:
    """Translate generic calls into one provider's HTTP API.

    Optional overrides:
    - DEFAULT_TIMEOUT: Request timeout in seconds when none is given
    - _get_api_key(): Credential lookup (defaults to the bound key source)
    """

    DEFAULT_TIMEOUT: float = 60.0

    def __init__(
        self,
        config: ProviderAdapterConfig,
        key_source: KeySource,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Wire description of the provider
            key_source: Accessor returning the bound secret key
            client: Shared HTTP client; a short-lived one is opened per call if None
            timeout: Request timeout in seconds
        """
        self._config = config
        self._key_source = key_source
        self._client = client
        self._timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

    @property
    def config(self) -> ProviderAdapterConfig:
        return self._config

    @property
    def provider(self) -> ProviderId:
        return self._config.provider

    def _get_api_key(self) -> str | None:
        return self._key_source()

    def build_request(self, prompt: str, model: str, api_key: str) -> dict[str, Any]:
        """Build the keyword arguments of the POST request.

        Returns:
            Dict with url, json, headers and params
        """
        return {
            "url": self._config.build_url(model),
            "json": self._config.build_body(prompt, model),
            "headers": self._config.headers(api_key),
            "params": self._config.auth_params(api_key),
        }

    async def call(self, prompt: str, model: str, timeout: float | None = None) -> str:
        """Send a prompt to the provider and return the assistant text.

        Args:
            prompt: Prompt text
            model: Model identifier, already resolved
            timeout: Optional per-call deadline in seconds

        Returns:
            Extracted response text

        Raises:
            AIHookError: On missing credential, HTTP error, network failure or
                empty response
        """
        api_key = self._get_api_key()
        if not api_key:
            raise missing_credential(self._config)

        try:
            request = self.build_request(prompt, model, api_key)
            response = await self._send(request, timeout)
            return self._parse_response(response)
        except AIHookError as e:
            self._log_failure(e)
            raise
        except Exception as e:
            error = classify_exception(e, self._config)
            self._log_failure(error)
            raise error from e

    def _log_failure(self, error: AIHookError) -> None:
        logger.warning("%s call failed (%s): %s", self.provider.value, error.kind.name, error.message)

    async def _send(self, request: dict[str, Any], timeout: float | None) -> httpx.Response:
        effective_timeout = timeout if timeout is not None else self._timeout
        logger.debug("POST %s (provider=%s)", request["url"], self.provider.value)

        if self._client is not None:
            return await self._client.post(timeout=effective_timeout, **request)

        async with httpx.AsyncClient(timeout=effective_timeout) as client:
            return await client.post(**request)

    def _parse_response(self, response: httpx.Response) -> str:
        if response.is_error:
            raise classify_status(response.status_code, raw_error_text(response), self._config)

        try:
            payload = response.json()
        except ValueError:
            raise empty_response(self._config) from None

        text = self._config.parse_text(payload)
        if not text:
            raise empty_response(self._config)
        return text

    def __repr__(self) -> str:
        return f"ProviderAdapter(provider={self.provider.value})"
