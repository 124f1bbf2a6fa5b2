"""core.exceptions

Centralised exception hierarchy for *postix*.

Each error carries an `http_status` attribute so that a presentation layer
(REST controller, desktop shell, etc.) can translate exceptions to an
appropriate response *without* scattering status-code logic throughout the
adapters. Every failure of a generation call surfaces as exactly one of these.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Mapping

    from postix.core.types import ProviderIdentity


# ---------------------------------------------------------------------------
# Base class with HTTP status information
# ---------------------------------------------------------------------------


class PostixError(Exception):
    """Base class for all *postix* domain errors."""

    #: Default HTTP status if not overridden by subclass.
    http_status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)

    def to_json(self) -> dict[str, dict[str, str]]:
        """Unified error body for callers that render errors as JSON."""
        return {'error': {'type': self.__class__.__name__, 'message': str(self)}}


# ---------------------------------------------------------------------------
# Concrete error classes
# ---------------------------------------------------------------------------


class ProviderNotFoundError(PostixError):
    """Raised when `ProviderRegistry` cannot find a requested provider key."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.NOT_IMPLEMENTED  # 501


class MissingCredentialError(PostixError):
    """No API key is available for the selected provider.

    This is a configuration problem, not a network one: callers should prompt
    for credentials (``requires_configuration``) rather than report a failure.
    """

    http_status: ClassVar[HTTPStatus] = HTTPStatus.PRECONDITION_REQUIRED  # 428
    requires_configuration: ClassVar[bool] = True

    def __init__(self, provider: ProviderIdentity) -> None:
        self.provider = provider
        super().__init__(f'Missing API key for {provider.label}. Configure a key for this provider.')


class TransportError(PostixError):
    """The provider could not be reached at all (DNS, connect, TLS, ...)."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_GATEWAY  # 502

    def __init__(self, detail: str | None = None) -> None:
        message = 'Network error contacting provider.'
        if detail:
            message = f'Network error contacting provider: {detail}'
        super().__init__(message)


class ProviderHTTPError(PostixError):
    """Non-success HTTP status returned by a provider."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_GATEWAY  # 502

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f'Provider Error: {message}')


class ModelNotFoundError(PostixError):
    """The requested model id is unavailable for the credential in use."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST  # 400
    code: ClassVar[str] = 'MODEL_NOT_FOUND'


class InvalidKeyError(PostixError):
    """The provider rejected the credential."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.UNAUTHORIZED  # 401
    code: ClassVar[str] = 'INVALID_KEY'

    def __init__(self, provider: ProviderIdentity) -> None:
        self.provider = provider
        super().__init__(f'INVALID_KEY: The API key for {provider.label} was rejected. Update it in the provider setup.')


class EmptyResponseError(PostixError):
    """Successful status, but the body could not be parsed."""

    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_GATEWAY  # 502


HTTP_STATUS_MAP: Mapping[type[PostixError], HTTPStatus] = {
    ProviderNotFoundError: ProviderNotFoundError.http_status,
    MissingCredentialError: MissingCredentialError.http_status,
    TransportError: TransportError.http_status,
    ProviderHTTPError: ProviderHTTPError.http_status,
    ModelNotFoundError: ModelNotFoundError.http_status,
    InvalidKeyError: InvalidKeyError.http_status,
    EmptyResponseError: EmptyResponseError.http_status,
}
