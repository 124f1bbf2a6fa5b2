"""adapters.openai_compatible

Adapters for providers speaking the OpenAI **Chat Completions** wire format:
OpenAI itself, Groq, OpenRouter and xAI Grok. They differ only in defaults,
plus OpenRouter's application identification headers.
"""

from __future__ import annotations

from postix.adapters.http_adapter import HTTPCompletionAdapter
from postix.core.config import APP_TITLE, app_origin
from postix.core.types import ProviderIdentity
from postix.registry.provider_registry import provider_registry


class OpenAIAdapter(HTTPCompletionAdapter):
    """Adapter for the OpenAI Chat Completions API."""

    provider = ProviderIdentity.OPENAI
    default_endpoint = 'https://api.openai.com/v1/chat/completions'
    default_model = 'gpt-4o'


class GroqAdapter(HTTPCompletionAdapter):
    provider = ProviderIdentity.GROQ
    default_endpoint = 'https://api.groq.com/openai/v1/chat/completions'
    default_model = 'llama-3.3-70b-versatile'


class OpenRouterAdapter(HTTPCompletionAdapter):
    """OpenRouter asks callers to identify themselves via referer + title."""

    provider = ProviderIdentity.OPENROUTER
    default_endpoint = 'https://openrouter.ai/api/v1/chat/completions'
    default_model = 'google/gemini-2.0-flash-lite-preview-02-05:free'

    def build_headers(self, credential: str) -> dict[str, str]:
        return {
            **super().build_headers(credential),
            'HTTP-Referer': app_origin(),
            'X-Title': APP_TITLE,
        }


class GrokAdapter(HTTPCompletionAdapter):
    provider = ProviderIdentity.GROK
    default_endpoint = 'https://api.x.ai/v1/chat/completions'
    default_model = 'grok-beta'


# ---------------------------------------------------------------------------
# Automatic registration
# ---------------------------------------------------------------------------

provider_registry.register(ProviderIdentity.OPENAI, OpenAIAdapter)
provider_registry.register(ProviderIdentity.GROQ, GroqAdapter)
provider_registry.register(ProviderIdentity.OPENROUTER, OpenRouterAdapter)
provider_registry.register(ProviderIdentity.GROK, GrokAdapter)
