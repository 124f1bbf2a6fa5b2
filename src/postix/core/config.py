"""core.config

Built-in provider configuration, model catalog and environment loading.

Configuration is a plain ``dict[ProviderIdentity, ProviderConfig]`` owned by
the caller. This module only *creates* such mappings and derives updated
copies; it never keeps one around as module state.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from postix.core.types import ModelOption, ProviderConfig, ProviderIdentity

if TYPE_CHECKING:
    from collections.abc import Mapping

load_dotenv()
logger = logging.getLogger(__name__)

#: Environment variables holding the user's own API key, per provider.
API_KEY_ENV_VARS: Mapping[ProviderIdentity, str] = {
    ProviderIdentity.GEMINI: 'GEMINI_API_KEY',
    ProviderIdentity.OPENAI: 'OPENAI_API_KEY',
    ProviderIdentity.ANTHROPIC: 'ANTHROPIC_API_KEY',
    ProviderIdentity.GROQ: 'GROQ_API_KEY',
    ProviderIdentity.OPENROUTER: 'OPENROUTER_API_KEY',
    ProviderIdentity.GROK: 'XAI_API_KEY',
}

APP_ORIGIN_ENV_VAR = 'POSTIX_APP_ORIGIN'
DEFAULT_APP_ORIGIN = 'http://localhost:3000'
APP_TITLE = 'Postix AI'

# Presets only tune sampling. Endpoint and model stay unset so the adapters'
# built-in defaults (and the Gemini tier map) apply until the user overrides them.
PRESET_TEMPERATURES: Mapping[ProviderIdentity, float] = {
    ProviderIdentity.GEMINI: 0.7,
    ProviderIdentity.OPENAI: 0.7,
    ProviderIdentity.ANTHROPIC: 0.7,
    ProviderIdentity.GROQ: 0.2,
    ProviderIdentity.OPENROUTER: 0.7,
    ProviderIdentity.GROK: 0.7,
}

#: Models offered for selection per provider; the first entry is the default.
MODEL_CATALOG: Mapping[ProviderIdentity, tuple[ModelOption, ...]] = {
    ProviderIdentity.GEMINI: (
        ModelOption(id='gemini-3-flash-preview', name='Gemini 3 Flash', description='Ultra-fast intelligence'),
        ModelOption(id='gemini-3-pro-preview', name='Gemini 3 Pro', description='Advanced reasoning'),
        ModelOption(id='gemini-flash-lite-latest', name='Gemini Flash Lite', description='Efficient & concise'),
    ),
    ProviderIdentity.OPENROUTER: (
        ModelOption(
            id='google/gemini-2.0-flash-lite-preview-02-05:free',
            name='Gemini 2.0 Flash Lite (Free)',
            description='Fast and reliable',
        ),
        ModelOption(id='deepseek/deepseek-r1:free', name='DeepSeek R1 (Free)', description='Advanced reasoning'),
        ModelOption(id='meta-llama/llama-3.1-8b-instruct:free', name='Llama 3.1 8B (Free)', description='Punchy'),
        ModelOption(id='openai/gpt-4o-mini', name='GPT-4o Mini', description='Smart and economical'),
        ModelOption(id='anthropic/claude-3.5-sonnet', name='Claude 3.5 Sonnet', description='Creative writing'),
    ),
    ProviderIdentity.GROQ: (
        ModelOption(id='llama-3.3-70b-versatile', name='Llama 3.3 70B', description='Instant generation'),
        ModelOption(id='llama3-8b-8192', name='Llama 3 8B', description='Hyper-speed'),
    ),
    ProviderIdentity.OPENAI: (
        ModelOption(id='gpt-4o', name='GPT-4o', description='Flagship model'),
        ModelOption(id='gpt-4o-mini', name='GPT-4o Mini', description='Fast'),
    ),
    ProviderIdentity.ANTHROPIC: (
        ModelOption(id='claude-3-5-sonnet-latest', name='Claude 3.5 Sonnet', description="The writer's choice"),
    ),
    ProviderIdentity.GROK: (ModelOption(id='grok-beta', name='Grok Beta', description='Witty and current'),),
}


def model_label(provider: ProviderIdentity, model_id: str | None) -> str:
    """Display name of *model_id*, falling back to the raw id."""
    for option in MODEL_CATALOG.get(provider, ()):
        if option.id == model_id:
            return option.name
    return model_id or 'Select Model'


def default_provider_configs() -> dict[ProviderIdentity, ProviderConfig]:
    """Fresh mapping with the preset config (no key yet) for every provider."""
    return {provider: ProviderConfig(temperature=PRESET_TEMPERATURES[provider]) for provider in ProviderIdentity}


def load_provider_configs(environ: Mapping[str, str] | None = None) -> dict[ProviderIdentity, ProviderConfig]:
    """Build the start-of-process configuration.

    Parameters
    ----------
    environ
        Mapping to read keys from. Defaults to ``os.environ`` (a local
        ``.env`` file is loaded into it when this module is imported).

    """
    if environ is None:
        environ = os.environ

    configs = default_provider_configs()
    for provider, variable in API_KEY_ENV_VARS.items():
        if key := environ.get(variable, '').strip():
            configs[provider] = configs[provider].model_copy(update={'api_key': key})
            logger.debug('Loaded API key for %s from %s', provider.label, variable)
    return configs


def update_provider_config(
    configs: Mapping[ProviderIdentity, ProviderConfig],
    provider: ProviderIdentity,
    **changes: object,
) -> dict[ProviderIdentity, ProviderConfig]:
    """Return a copy of *configs* with *provider*'s settings changed.

    The input mapping and its values are left untouched.
    """
    current = configs.get(provider) or ProviderConfig()
    # Round-trip through validation so blank overrides normalise to None.
    updated = ProviderConfig.model_validate({**current.model_dump(), **changes})
    return {**configs, provider: updated}


def app_origin() -> str:
    """Origin reported to providers that identify the calling application."""
    return os.getenv(APP_ORIGIN_ENV_VAR, '').strip() or DEFAULT_APP_ORIGIN
