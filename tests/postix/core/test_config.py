from __future__ import annotations

import pytest

from postix.adapters.anthropic_adapter import AnthropicAdapter
from postix.adapters.gemini_adapter import TIER_MODELS
from postix.adapters.openai_compatible import GrokAdapter, GroqAdapter, OpenAIAdapter, OpenRouterAdapter
from postix.core.config import (
    DEFAULT_APP_ORIGIN,
    MODEL_CATALOG,
    app_origin,
    default_provider_configs,
    load_provider_configs,
    model_label,
    update_provider_config,
)
from postix.core.credentials import CredentialSource, EnvironmentCredentialSource
from postix.core.types import ProviderConfig, ProviderIdentity


def test_defaults_cover_every_provider() -> None:
    configs = default_provider_configs()
    assert set(configs) == set(ProviderIdentity)
    # presets never pin an endpoint or model, so the routing defaults apply
    assert all(cfg.model is None and cfg.base_url is None and not cfg.api_key for cfg in configs.values())


def test_preset_temperatures() -> None:
    configs = default_provider_configs()
    assert configs[ProviderIdentity.GROQ].temperature == 0.2  # noqa: PLR2004
    assert configs[ProviderIdentity.OPENAI] == ProviderConfig()


@pytest.mark.parametrize(
    'adapter_cls',
    [OpenAIAdapter, GroqAdapter, OpenRouterAdapter, GrokAdapter, AnthropicAdapter],
)
def test_catalog_leads_with_default_model(adapter_cls: type) -> None:
    assert MODEL_CATALOG[adapter_cls.provider][0].id == adapter_cls.default_model


def test_gemini_catalog_matches_tiers() -> None:
    assert {option.id for option in MODEL_CATALOG[ProviderIdentity.GEMINI]} == set(TIER_MODELS.values())


def test_model_label() -> None:
    assert model_label(ProviderIdentity.OPENROUTER, 'deepseek/deepseek-r1:free') == 'DeepSeek R1 (Free)'
    assert model_label(ProviderIdentity.GROQ, 'custom-model') == 'custom-model'
    assert model_label(ProviderIdentity.GROK, None) == 'Select Model'


def test_load_from_explicit_environ() -> None:
    configs = load_provider_configs({'GROQ_API_KEY': ' gsk-1 ', 'XAI_API_KEY': 'xai-2'})
    assert configs[ProviderIdentity.GROQ].api_key == 'gsk-1'
    assert configs[ProviderIdentity.GROK].api_key == 'xai-2'
    assert configs[ProviderIdentity.OPENAI].api_key == ''


def test_update_returns_new_mapping() -> None:
    original = default_provider_configs()
    updated = update_provider_config(original, ProviderIdentity.OPENAI, api_key='sk-1', model='  ')

    assert original[ProviderIdentity.OPENAI].api_key == ''
    assert updated[ProviderIdentity.OPENAI].api_key == 'sk-1'
    assert updated[ProviderIdentity.OPENAI].model is None
    assert updated[ProviderIdentity.GROQ] is original[ProviderIdentity.GROQ]


def test_app_origin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('POSTIX_APP_ORIGIN', 'https://studio.example')
    assert app_origin() == 'https://studio.example'
    monkeypatch.setenv('POSTIX_APP_ORIGIN', '')
    assert app_origin() == DEFAULT_APP_ORIGIN


def test_environment_credential_source(monkeypatch: pytest.MonkeyPatch) -> None:
    source = EnvironmentCredentialSource('POSTIX_TEST_MANAGED_KEY', use_dotenv=False)
    assert isinstance(source, CredentialSource)

    monkeypatch.delenv('POSTIX_TEST_MANAGED_KEY', raising=False)
    assert source.try_acquire_credential() is None

    monkeypatch.setenv('POSTIX_TEST_MANAGED_KEY', 'managed-123')
    assert source.try_acquire_credential() == 'managed-123'
