"""adapters.gemini_adapter

Concrete adapter for the **managed** provider, Google Gemini, via the
``google-genai`` SDK.

Unlike the HTTP providers this one is stateful from the caller's point of
view: the conversation turns are threaded through every call, the system
instruction carries the style rules, and web grounding is enabled so the reply
comes back with citations. When the user configured no key, an injected
`CredentialSource` may supply one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

import httpx
from google import genai
from google.genai import errors, types

from postix.core.abc import AbstractPostClient
from postix.core.exceptions import InvalidKeyError, ModelNotFoundError, PostixError, ProviderHTTPError, TransportError
from postix.core.normalize import normalize_managed
from postix.core.prompts import build_conversation, build_system_instruction
from postix.core.types import ModelTier, ProviderIdentity
from postix.registry.provider_registry import provider_registry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from postix.core.credentials import CredentialSource
    from postix.core.route import ModelRoute
    from postix.core.types import ConversationTurn, GeneratedPost, GenerationRequest, ProviderConfig

logger = logging.getLogger(__name__)

#: Canonical tier → model mapping.
TIER_MODELS: Mapping[ModelTier, str] = {
    ModelTier.FLASH: 'gemini-3-flash-preview',
    ModelTier.PRO: 'gemini-3-pro-preview',
    ModelTier.LITE: 'gemini-flash-lite-latest',
}

REASONING_THINKING_BUDGET = 4000


class GeminiAdapter(AbstractPostClient):
    """Adapter for Gemini ``generate_content`` with Google Search grounding."""

    provider = ProviderIdentity.GEMINI
    default_model = TIER_MODELS[ModelTier.FLASH]
    managed_credentials: ClassVar[bool] = True

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        credential_source: CredentialSource | None = None,
        client: Any | None = None,
    ) -> None:
        super().__init__(config, credential_source=credential_source)
        # Anything exposing ``models.generate_content``; built per call otherwise.
        self._client = client

    def resolve_default_model(self, request: GenerationRequest) -> str:
        return TIER_MODELS.get(request.model_tier, self.default_model)

    # ------------------------------------------------------------------
    # Request shaping
    # ------------------------------------------------------------------

    @staticmethod
    def build_contents(conversation: tuple[ConversationTurn, ...]) -> list[types.Content]:
        return [types.Content(role=turn.role.value, parts=[types.Part(text=turn.text)]) for turn in conversation]

    def build_config(self, request: GenerationRequest, route: ModelRoute) -> types.GenerateContentConfig:
        config_kwargs: dict[str, Any] = {
            'system_instruction': build_system_instruction(request),
            'tools': [types.Tool(google_search=types.GoogleSearch())],
        }
        # Only the reasoning-tier model gets a thinking budget.
        if route.model == TIER_MODELS[ModelTier.PRO]:
            config_kwargs['thinking_config'] = types.ThinkingConfig(thinking_budget=REASONING_THINKING_BUDGET)
        return types.GenerateContentConfig(**config_kwargs)

    # ------------------------------------------------------------------
    # Error classification
    # ------------------------------------------------------------------

    @staticmethod
    def _error_reasons(exc: errors.APIError) -> set[str]:
        """``reason`` values of the ErrorInfo entries in the error body."""
        body = exc.details if isinstance(exc.details, dict) else {}
        body = body.get('error', body)
        entries = body.get('details') if isinstance(body, dict) else None
        return {entry['reason'] for entry in entries or [] if isinstance(entry, dict) and entry.get('reason')}

    def _classify(self, exc: errors.APIError, route: ModelRoute) -> PostixError:
        message = exc.message or str(exc)
        lowered = message.lower()
        if (
            exc.code in (401, 403)
            or exc.status == 'UNAUTHENTICATED'
            or 'API_KEY_INVALID' in self._error_reasons(exc)
            or 'api key not valid' in lowered
            or 'api_key_invalid' in lowered
        ):
            return InvalidKeyError(self.provider)
        if exc.code == 404 or 'not found' in lowered:  # noqa: PLR2004
            return ModelNotFoundError(
                f"MODEL_NOT_FOUND: Model '{route.model}' is not available for this API key. "
                f'Switch to the {ModelTier.FLASH.value} tier.',
            )
        return ProviderHTTPError(exc.code, message)

    # ------------------------------------------------------------------
    # Synchronous path
    # ------------------------------------------------------------------

    @staticmethod
    def create_client(route: ModelRoute) -> genai.Client:
        """SDK client for *route*; an endpoint override becomes the SDK base URL."""
        if route.endpoint:
            return genai.Client(api_key=route.credential, http_options=types.HttpOptions(base_url=route.endpoint))
        return genai.Client(api_key=route.credential)

    def _invoke(self, request: GenerationRequest, route: ModelRoute) -> GeneratedPost:
        conversation = build_conversation(request)
        owns_client = self._client is None
        client = self.create_client(route) if owns_client else self._client

        try:
            response = client.models.generate_content(
                model=route.model,
                contents=self.build_contents(conversation),
                config=self.build_config(request, route),
            )
        except errors.APIError as exc:
            logger.warning('Gemini call failed (code=%s): %s', exc.code, exc.message)
            raise self._classify(exc, route) from exc
        except httpx.RequestError as exc:
            logger.warning('Gemini unreachable: %s', exc)
            raise TransportError(str(exc)) from exc
        finally:
            if owns_client:
                client.close()

        return normalize_managed(response, conversation)


# ---------------------------------------------------------------------------
# Automatic registration
# ---------------------------------------------------------------------------

provider_registry.register(ProviderIdentity.GEMINI, GeminiAdapter)
