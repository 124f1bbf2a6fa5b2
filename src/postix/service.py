"""service

Pure request-handling entry point.

The caller owns all state (configuration map, current result, history) and
passes it in explicitly; nothing is remembered between calls. To refine a
post, build a new `GenerationRequest` with ``history=previous.history`` and a
``refinement_command``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from postix.core.exceptions import PostixError
from postix.registry.client_factory import PostClientFactory

if TYPE_CHECKING:
    from collections.abc import Mapping

    from postix.core.types import GeneratedPost, GenerationRequest, ProviderConfig, ProviderIdentity

logger = logging.getLogger(__name__)


def generate_post(
    request: GenerationRequest,
    configs: Mapping[ProviderIdentity, ProviderConfig] | None = None,
    **adapter_kwargs: object,
) -> GeneratedPost:
    """Generate (or refine) one post with the provider named in *request*.

    Parameters
    ----------
    request
        The user's intent, including any history threaded from a previous result.
    configs
        Per-provider settings; the entry for ``request.provider`` is used.
        Built-in defaults apply when it is missing.
    **adapter_kwargs
        Forwarded to the adapter constructor (``http_client``, ``client``,
        ``credential_source``, ``timeout``).

    Raises
    ------
    PostixError
        Exactly one classified error when the call does not succeed.

    """
    config = (configs or {}).get(request.provider)
    client = PostClientFactory.initialize_client(request.provider, config, **adapter_kwargs)
    try:
        post = client.generate(request)
    except PostixError as exc:
        logger.info('Generation with %s failed: %s', request.provider.label, exc)
        raise
    logger.info(
        'Generated %d characters with %s (%d sources)',
        len(post.content),
        request.provider.label,
        len(post.sources),
    )
    return post
