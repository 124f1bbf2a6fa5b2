"""core.abc

Abstract base class that *all* provider adapters must implement.

Design goals
============
1. **One variant per provider** - each adapter class carries its own defaults
    (`default_endpoint`, `default_model`), its own route resolution, prompt
    shaping and response parsing. Adding a provider means adding a class and
    registering it, never editing a shared conditional chain.
2. **Uniform public API** - callers interact exclusively via `generate()`,
    passing a `GenerationRequest` and receiving a `GeneratedPost`.
3. **Fail before the network** - credentials are resolved up front so a
    missing key is reported as a configuration problem, not a transport one.
4. **No hidden retries** - a call either succeeds once or raises one error.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from postix.core.exceptions import MissingCredentialError
from postix.core.route import ModelRoute
from postix.core.types import ProviderConfig

if TYPE_CHECKING:
    from postix.core.credentials import CredentialSource
    from postix.core.types import GeneratedPost, GenerationRequest, ProviderIdentity

logger = logging.getLogger(__name__)


class AbstractPostClient(ABC):
    """Provider-independent post generation interface."""

    provider: ClassVar[ProviderIdentity]
    default_endpoint: ClassVar[str | None] = None
    default_model: ClassVar[str]
    #: Whether an injected `CredentialSource` may stand in for a missing key.
    managed_credentials: ClassVar[bool] = False

    # ---------------------------------------------------------------------
    # Construction
    # ---------------------------------------------------------------------

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        credential_source: CredentialSource | None = None,
    ) -> None:
        """Store the provider *config* and the optional managed credential source."""
        self._config: ProviderConfig = config or ProviderConfig()
        self._credential_source = credential_source

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, request: GenerationRequest) -> GeneratedPost:
        """Run one generation or refinement call.

        Subclasses **must not** override this - override `_invoke()` instead.
        """
        route = self.resolve_route(request)
        logger.info(
            'Generating post via %s (model=%s, refinement=%s)',
            self.provider.label,
            route.model,
            request.is_refinement,
        )
        return self._invoke(request, route)

    def resolve_route(self, request: GenerationRequest) -> ModelRoute:
        """Pick endpoint, model and credential; overrides beat built-in defaults."""
        credential = self.resolve_credential()
        return ModelRoute(
            provider=self.provider,
            endpoint=self._config.base_url or self.default_endpoint,
            model=self._config.model or self.resolve_default_model(request),
            credential=credential,
            headers=self.build_headers(credential),
        )

    def resolve_default_model(self, request: GenerationRequest) -> str:  # noqa: ARG002
        """Model used when the config has no override. Tier-aware adapters override this."""
        return self.default_model

    def resolve_credential(self) -> str:
        """Return the configured key, or a managed one where the provider allows it.

        Raises
        ------
        MissingCredentialError
            If no credential could be found.

        """
        if self._config.api_key:
            return self._config.api_key
        if self.managed_credentials and self._credential_source is not None:
            if credential := self._credential_source.try_acquire_credential():
                logger.info('Using managed credential for %s', self.provider.label)
                return credential
        raise MissingCredentialError(self.provider)

    def build_headers(self, credential: str) -> dict[str, str]:  # noqa: ARG002
        """Transport headers for this provider. SDK-backed adapters need none."""
        return {}

    # ------------------------------------------------------------------
    # Methods to implement in concrete adapters
    # ------------------------------------------------------------------

    @abstractmethod
    def _invoke(self, request: GenerationRequest, route: ModelRoute) -> GeneratedPost:
        """Provider-specific **blocking** implementation (to be overridden)."""

    # ------------------------------------------------------------------
    # Helper - string representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f'<{self.__class__.__name__} provider={self.provider!s} model={self._config.model!r}>'
