from __future__ import annotations

from types import SimpleNamespace

import pytest

from postix.core.normalize import (
    COMPLETION_FALLBACK_TEXT,
    MANAGED_FALLBACK_TEXT,
    dedupe_sources,
    extract_completion_text,
    extract_grounding_sources,
    normalize_completion,
    normalize_managed,
)
from postix.core.types import ConversationRole, ConversationTurn, GroundingSource


def _chunk(uri: object, title: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


def _response(text: str | None, chunks: list[object] | None = None) -> SimpleNamespace:
    metadata = SimpleNamespace(grounding_chunks=chunks)
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


def test_dedupe_keeps_first_title_and_order() -> None:
    sources = [
        GroundingSource(title='First', uri='https://a.example'),
        GroundingSource(title='B', uri='https://b.example'),
        GroundingSource(title='Second', uri='https://a.example'),
    ]
    out = dedupe_sources(sources)
    assert [s.uri for s in out] == ['https://a.example', 'https://b.example']
    assert out[0].title == 'First'


def test_grounding_sources_skip_malformed_chunks() -> None:
    response = _response(
        'x',
        [
            _chunk('https://a.example', 'A'),
            SimpleNamespace(web=None),
            _chunk('   '),  # fails validation, skipped
            _chunk(42),  # not a string, skipped
            _chunk('https://b.example'),
            _chunk('https://a.example', 'A again'),
        ],
    )
    sources = extract_grounding_sources(response)
    assert len(sources) == 2  # noqa: PLR2004
    assert sources[0] == GroundingSource(title='A', uri='https://a.example')
    assert sources[1].title == 'Reference'


def test_grounding_sources_absent() -> None:
    assert extract_grounding_sources(SimpleNamespace(text='x', candidates=None)) == ()
    assert extract_grounding_sources(_response('x', None)) == ()


def test_normalize_managed_trims_and_threads_history() -> None:
    conversation = (ConversationTurn(role='user', text='go'),)
    post = normalize_managed(_response('  a post \n', [_chunk('https://a.example', 'A')]), conversation)
    assert post.content == 'a post'
    assert len(post.sources) == 1
    assert post.history == (*conversation, ConversationTurn(role=ConversationRole.model, text='a post'))


def test_normalize_managed_fallback() -> None:
    post = normalize_managed(SimpleNamespace(text=None, candidates=[]), ())
    assert post.content == MANAGED_FALLBACK_TEXT


@pytest.mark.parametrize(
    ('data', 'expected'),
    [
        ({'choices': [{'message': {'content': ' openai shape '}}]}, ' openai shape '),
        ({'content': [{'type': 'text', 'text': 'anthropic shape'}]}, 'anthropic shape'),
        ({'choices': [], 'content': [{'text': 'second wins'}]}, 'second wins'),
        ({'choices': [{'message': {'content': ''}}]}, COMPLETION_FALLBACK_TEXT),
        ({'content': 'flat string'}, COMPLETION_FALLBACK_TEXT),
        ([], COMPLETION_FALLBACK_TEXT),
    ],
)
def test_extract_completion_text(data: object, expected: str) -> None:
    assert extract_completion_text(data) == expected


def test_normalize_completion_is_stateless() -> None:
    post = normalize_completion({'choices': [{'message': {'content': 'hi'}}]})
    assert post.content == 'hi'
    assert post.sources == ()
    assert post.history == ()
