"""adapters.http_adapter

Shared implementation for providers reached with one plain JSON POST.

These providers are called as stateless single-shot completions: the request
is flattened into one user message, and the result never carries history.
Concrete subclasses only declare their defaults and, where needed, extra
headers or body fields.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from postix.core.abc import AbstractPostClient
from postix.core.exceptions import EmptyResponseError, ProviderHTTPError, TransportError
from postix.core.normalize import normalize_completion
from postix.core.prompts import build_flat_prompt

if TYPE_CHECKING:
    from postix.core.credentials import CredentialSource
    from postix.core.route import ModelRoute
    from postix.core.types import GeneratedPost, GenerationRequest, ProviderConfig

logger = logging.getLogger(__name__)


class HTTPCompletionAdapter(AbstractPostClient):
    """Base adapter for JSON-over-HTTP completion endpoints."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        credential_source: CredentialSource | None = None,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(config, credential_source=credential_source)
        # No timeout unless the caller asks for one.
        self._http_client = http_client
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Request shaping
    # ------------------------------------------------------------------

    def build_headers(self, credential: str) -> dict[str, str]:
        return {
            'Authorization': f'Bearer {credential}',
            'Content-Type': 'application/json',
        }

    def build_body(self, route: ModelRoute, prompt: str) -> dict[str, Any]:
        return {
            'model': route.model,
            'messages': [{'role': 'user', 'content': prompt}],
            'temperature': self._config.temperature,
        }

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _post(self, route: ModelRoute, body: dict[str, Any]) -> httpx.Response:
        try:
            if self._http_client is not None:
                return self._http_client.post(route.endpoint, headers=route.headers, json=body)
            with httpx.Client(timeout=self._timeout) as client:
                return client.post(route.endpoint, headers=route.headers, json=body)
        except httpx.RequestError as exc:
            logger.warning('%s unreachable at %s: %s', self.provider.label, route.endpoint, exc)
            raise TransportError(str(exc)) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """``error.message`` from a JSON error body, else the HTTP reason phrase."""
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        error = payload.get('error') if isinstance(payload, dict) else None
        message = error.get('message') if isinstance(error, dict) else None
        return message or response.reason_phrase or f'HTTP {response.status_code}'

    def _invoke(self, request: GenerationRequest, route: ModelRoute) -> GeneratedPost:
        body = self.build_body(route, build_flat_prompt(request))
        response = self._post(route, body)

        if not response.is_success:
            message = self._error_message(response)
            logger.warning('%s returned HTTP %d: %s', self.provider.label, response.status_code, message)
            raise ProviderHTTPError(response.status_code, message)

        try:
            data = response.json()
        except ValueError as exc:
            raise EmptyResponseError(f'{self.provider.label} returned an unparseable response.') from exc

        return normalize_completion(data)
