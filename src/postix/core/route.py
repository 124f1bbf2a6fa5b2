"""core.route

Value object describing *where* and *how* a single generation call is sent.

A `ModelRoute` is the output of an adapter's `resolve_route()` (the provider
router) and is consumed by the same adapter's `_invoke()`. Keeping it a frozen
Pydantic model makes resolution a pure, easily testable step.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from postix.core.types import ProviderIdentity  # noqa: TC001 - needed at runtime by pydantic


class ModelRoute(BaseModel):
    """Resolved endpoint, model id, credential and headers for one call.

    * `endpoint` … full URL, or ``None`` when the provider SDK owns transport
    * `model` … concrete model identifier sent to the provider
    * `credential` … API key; never shown in ``repr()`` / logs
    """

    provider: ProviderIdentity
    endpoint: str | None = None
    model: str = Field(..., min_length=1)
    credential: str = Field(..., min_length=1, repr=False)
    headers: dict[str, str] = Field(default_factory=dict, repr=False)

    model_config = {
        'frozen': True,
    }

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f'{self.provider}:{self.model}'
