"""core.normalize

Maps raw provider responses onto the canonical `GeneratedPost`.

The managed provider answers with an SDK response object (attribute access,
optional grounding metadata); the HTTP providers answer with plain JSON in
either the OpenAI ``choices`` shape or the Anthropic ``content`` shape.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from postix.core.types import ConversationRole, ConversationTurn, GeneratedPost, GroundingSource

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

MANAGED_FALLBACK_TEXT = 'Synthesis failed.'
COMPLETION_FALLBACK_TEXT = 'No content returned.'


# ---------------------------------------------------------------------------
# Grounding sources
# ---------------------------------------------------------------------------


def dedupe_sources(sources: Iterable[GroundingSource]) -> tuple[GroundingSource, ...]:
    """Unique by uri; the first title seen for a uri wins, order is discovery order."""
    by_uri: dict[str, GroundingSource] = {}
    for source in sources:
        by_uri.setdefault(source.uri, source)
    return tuple(by_uri.values())


def extract_grounding_sources(response: Any) -> tuple[GroundingSource, ...]:
    """Collect web citations from ``candidates[0].grounding_metadata``.

    Malformed chunks are skipped one by one; they never fail the response.
    """
    candidates = getattr(response, 'candidates', None) or []
    if not candidates:
        return ()
    metadata = getattr(candidates[0], 'grounding_metadata', None)
    chunks = getattr(metadata, 'grounding_chunks', None) or []

    found: list[GroundingSource] = []
    for index, chunk in enumerate(chunks):
        web = getattr(chunk, 'web', None)
        uri = getattr(web, 'uri', None)
        if not uri:
            continue
        try:
            found.append(GroundingSource(title=getattr(web, 'title', None) or 'Reference', uri=uri))
        except ValidationError:
            logger.debug('Skipping malformed grounding chunk #%d', index)
    return dedupe_sources(found)


# ---------------------------------------------------------------------------
# Managed provider
# ---------------------------------------------------------------------------


def normalize_managed(response: Any, conversation: tuple[ConversationTurn, ...]) -> GeneratedPost:
    """Result for the managed provider; history grows by the model's reply."""
    text = getattr(response, 'text', None) or MANAGED_FALLBACK_TEXT
    content = text.strip()
    return GeneratedPost(
        content=content,
        sources=extract_grounding_sources(response),
        history=(*conversation, ConversationTurn(role=ConversationRole.model, text=content)),
    )


# ---------------------------------------------------------------------------
# Stateless HTTP providers
# ---------------------------------------------------------------------------


def _dig(data: Any, *path: str | int) -> Any:
    for key in path:
        try:
            data = data[key]
        except (KeyError, IndexError, TypeError):
            return None
    return data


def extract_completion_text(data: Any) -> str:
    """``choices[0].message.content``, else ``content[0].text``, else a fallback."""
    for path in (('choices', 0, 'message', 'content'), ('content', 0, 'text')):
        text = _dig(data, *path)
        if isinstance(text, str) and text:
            return text
    return COMPLETION_FALLBACK_TEXT


def normalize_completion(data: Any) -> GeneratedPost:
    """Result for stateless providers: content as returned, no sources, no history."""
    return GeneratedPost(content=extract_completion_text(data))
