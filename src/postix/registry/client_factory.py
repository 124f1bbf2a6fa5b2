"""registry.client_factory

Factory responsible for converting a provider key (or `ProviderIdentity`)
plus its `ProviderConfig` into a fully initialized adapter instance
(subclass of AbstractPostClient).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from postix.registry.provider_registry import load_builtin_adapters, provider_registry

if TYPE_CHECKING:
    from postix.core.abc import AbstractPostClient
    from postix.core.types import ProviderConfig


class PostClientFactory:
    """Factory for creating provider-specific post clients.

    This class is stateless; all information resides in provider_registry.
    """

    @staticmethod
    def initialize_client(
        provider: str,
        config: ProviderConfig | None = None,
        **adapter_kwargs: object,
    ) -> AbstractPostClient:
        """Return a concrete adapter for *provider*.

        Parameters
        ----------
        provider
            A `ProviderIdentity` or its slug (e.g. ``"groq"``).
        config
            Connection settings for this provider. Defaults apply when omitted.
        **adapter_kwargs
            Keyword arguments forwarded to the adapter's constructor. This lets
            callers hand in an ``http_client``, a genai ``client`` or a
            ``credential_source`` without changing the factory signature.

        """
        load_builtin_adapters()

        # Look up the appropriate adapter class for this provider
        adapter_class = provider_registry.get_adapter_cls(provider)

        # Instantiate and return the adapter with the given settings
        return adapter_class(config, **adapter_kwargs)
