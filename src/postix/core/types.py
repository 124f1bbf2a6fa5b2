"""core.types

Shared DTOs and enums used throughout *postix*.

These models live in the **core** layer so that *adapters*, *registry*, and
the service entry point can depend on them without causing circular imports.
Every model is frozen: a request is built once by the caller, a result is
produced once by an adapter, and the next refinement gets a *new* request.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ProviderIdentity(StrEnum):
    GEMINI = 'gemini'
    OPENAI = 'openai'
    ANTHROPIC = 'anthropic'
    GROQ = 'groq'
    OPENROUTER = 'openrouter'
    GROK = 'grok'

    @property
    def label(self) -> str:
        """Human readable provider name, used in user-facing messages."""
        return _PROVIDER_LABELS[self]


_PROVIDER_LABELS: dict[ProviderIdentity, str] = {
    ProviderIdentity.GEMINI: 'Google Gemini',
    ProviderIdentity.OPENAI: 'OpenAI',
    ProviderIdentity.ANTHROPIC: 'Anthropic',
    ProviderIdentity.GROQ: 'Groq',
    ProviderIdentity.OPENROUTER: 'OpenRouter',
    ProviderIdentity.GROK: 'xAI Grok',
}


class PostStyle(StrEnum):
    STORYTELLER = 'Storyteller'
    PROVOCATIVE = 'Provocative'
    OBSERVATIONAL = 'Observational'
    TECHNICAL_LEAD = 'Technical Lead'
    FOUNDER_VIBE = 'Founder Vibe'
    MINIMALIST = 'Minimalist'
    SARCASTIC = 'Sarcastic'
    CURATED = 'Curated Insights'
    CUSTOM = 'Custom Identity'


class ModelTier(StrEnum):
    """Coarse quality/speed class. Only the managed provider maps it to a model."""

    FLASH = 'Speed (Flash)'
    PRO = 'Reasoning (Pro)'
    LITE = 'Efficiency (Lite)'


class ConversationRole(StrEnum):
    user = 'user'
    model = 'model'


# ---------------------------------------------------------------------------
# Conversation + results
# ---------------------------------------------------------------------------


class ConversationTurn(BaseModel):
    """Single entry of the append-only conversation log."""

    role: ConversationRole
    text: str

    model_config = ConfigDict(frozen=True)


class GroundingSource(BaseModel):
    """Web citation returned alongside generated text. `uri` is the identity."""

    title: str = 'Reference'
    uri: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class GeneratedPost(BaseModel):
    """Canonical result of one successful provider call."""

    content: str
    sources: tuple[GroundingSource, ...] = ()
    history: tuple[ConversationTurn, ...] = ()

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Configuration + requests
# ---------------------------------------------------------------------------


class ModelOption(BaseModel):
    """Selectable model of a provider's catalog."""

    id: str
    name: str
    description: str = ''

    model_config = ConfigDict(frozen=True)


class ProviderConfig(BaseModel):
    """Per-provider connection settings.

    `temperature` is documented for 0.0-2.0 but deliberately not range-checked;
    whatever the user configured is forwarded to the provider.
    """

    api_key: str = ''
    model: str | None = None
    base_url: str | None = None
    temperature: float = 0.7

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator('model', 'base_url', mode='after')
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        """Blank overrides mean "use the built-in default"."""
        return v or None


class GenerationRequest(BaseModel):
    """One user-initiated generation or refinement intent."""

    subject: str = ''
    max_characters: int = Field(280, ge=0)
    style: PostStyle = PostStyle.STORYTELLER
    custom_style_description: str = ''
    provider: ProviderIdentity = ProviderIdentity.GEMINI
    model_tier: ModelTier = ModelTier.FLASH
    custom_instructions: str | None = None
    refinement_command: str | None = None
    history: tuple[ConversationTurn, ...] = ()

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @model_validator(mode='after')
    def _check_intent(self) -> GenerationRequest:
        if not self.subject and not self.refinement_command:
            raise ValueError('subject must not be empty unless a refinement command is given')
        if self.style is PostStyle.CUSTOM and not self.custom_style_description:
            raise ValueError('custom style requires a custom_style_description')
        return self

    @property
    def is_refinement(self) -> bool:
        return bool(self.refinement_command)

    @property
    def persona(self) -> str:
        """Style label, or the user's persona description for the custom style."""
        if self.style is PostStyle.CUSTOM:
            return self.custom_style_description
        return self.style.value
