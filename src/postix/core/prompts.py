"""core.prompts

Turns a `GenerationRequest` into the text actually sent to a provider.

Two shapes exist:

* the managed provider keeps a multi-turn conversation, so it gets a system
  instruction plus the threaded turn list (`build_system_instruction`,
  `build_conversation`);
* every other provider is called as a stateless single shot, so refinement
  context has to be restated in one flat prompt (`build_flat_prompt`).
"""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

from postix.core.types import ConversationRole, ConversationTurn, PostStyle, ProviderIdentity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from postix.core.types import GenerationRequest

#: Tone hint per engine, placed in the system instruction.
PERSONALITIES: Mapping[ProviderIdentity, str] = {
    ProviderIdentity.GEMINI: 'Focus on multimodal logic and creative synthesis.',
    ProviderIdentity.OPENAI: 'Focus on high-energy, structured, and professional output.',
    ProviderIdentity.ANTHROPIC: 'Focus on nuanced, ethical, and conversational storytelling.',
    ProviderIdentity.GROQ: 'Focus on rapid-fire, concise, and punchy statements.',
    ProviderIdentity.OPENROUTER: 'Versatile cross-model logic with broad context.',
    ProviderIdentity.GROK: 'Witty, slightly rebellious, and highly current logic.',
}

_STRICT_RULES = """\
STRICT RULES:
1. No generic AI phrasing or cliches ("delve", "game-changer", "in today's fast-paced world").
2. No hashtags unless the user explicitly asks for them.
3. Human-like spacing: short lines and deliberate white space.
4. Write in an insider's voice, as a practitioner who knows the subject first hand."""


def _voice_line(request: GenerationRequest) -> str:
    if request.style is PostStyle.CUSTOM:
        return f'PERSONA: {request.persona}'
    return f'STYLE: {request.persona}'


def build_system_instruction(request: GenerationRequest) -> str:
    """System instruction for the managed (multi-turn) provider."""
    limit = request.max_characters
    sections = [
        'You are an elite social media ghostwriter.',
        f'ENGINE PERSONALITY: {PERSONALITIES.get(request.provider, "Versatile")}',
        f'TARGET: "{request.subject}"' if request.subject else '',
        _voice_line(request),
        dedent(f"""\
            LIMIT: {limit} characters.
            This is an absolute upper bound, never exceed it. Scale verbosity to the limit:
            a small limit means one sharp thought, a large one leaves room for a full story."""),
        _STRICT_RULES,
    ]
    if request.custom_instructions:
        sections.append(f'USER REQUIREMENTS: {request.custom_instructions}')
    return '\n\n'.join(s for s in sections if s)


def build_conversation(request: GenerationRequest) -> tuple[ConversationTurn, ...]:
    """Prior history plus the one user turn to send now."""
    limit = request.max_characters
    if request.is_refinement:
        text = (
            f'Apply this change to the previous post: {request.refinement_command}\n'
            f'Keep it under {limit} characters. Return only the revised post.'
        )
    else:
        text = f'Research "{request.subject}" and write an initial post under {limit} characters.'
    return (*request.history, ConversationTurn(role=ConversationRole.user, text=text))


def build_flat_prompt(request: GenerationRequest) -> str:
    """Single instruction string for stateless providers."""
    if request.style is PostStyle.CUSTOM:
        voice = f'in the voice of this persona: {request.persona}'
    else:
        voice = f'in a {request.persona} style'
    limit = f'Limit: {request.max_characters} characters. No hashtags. No AI cliches.'

    if request.is_refinement:
        # No history is kept for these providers, so restate the original brief.
        subject = f' about "{request.subject}"' if request.subject else ''
        prompt = (
            f'Rewrite a social media post{subject} {voice}. '
            f'Apply this requested change: {request.refinement_command}. {limit}'
        )
    else:
        prompt = f'Write a social media post about "{request.subject}" {voice}. {limit}'

    if request.custom_instructions:
        prompt += f'\nAdditional requirements: {request.custom_instructions}'
    return prompt
