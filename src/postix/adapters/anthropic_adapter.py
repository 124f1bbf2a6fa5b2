"""adapters.anthropic_adapter

Adapter for the Anthropic **Messages** HTTP API.

Besides the bearer token shared with every HTTP provider, the Messages API
authenticates with ``x-api-key`` and requires a version header and an explicit
``max_tokens``. Its reply uses the ``content[0].text`` shape, which
`normalize_completion` already handles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from postix.adapters.http_adapter import HTTPCompletionAdapter
from postix.core.types import ProviderIdentity
from postix.registry.provider_registry import provider_registry

if TYPE_CHECKING:
    from postix.core.route import ModelRoute

ANTHROPIC_VERSION = '2023-06-01'
MAX_TOKENS = 1024


class AnthropicAdapter(HTTPCompletionAdapter):
    provider = ProviderIdentity.ANTHROPIC
    default_endpoint = 'https://api.anthropic.com/v1/messages'
    default_model = 'claude-3-5-sonnet-latest'

    def build_headers(self, credential: str) -> dict[str, str]:
        return {
            **super().build_headers(credential),
            'x-api-key': credential,
            'anthropic-version': ANTHROPIC_VERSION,
        }

    def build_body(self, route: ModelRoute, prompt: str) -> dict[str, Any]:
        return {**super().build_body(route, prompt), 'max_tokens': MAX_TOKENS}


# ---------------------------------------------------------------------------
# Automatic registration
# ---------------------------------------------------------------------------

provider_registry.register(ProviderIdentity.ANTHROPIC, AnthropicAdapter)
