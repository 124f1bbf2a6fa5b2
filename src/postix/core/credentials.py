"""core.credentials

Optional "managed credential" collaborator.

Some host environments can hand out an API key on demand (for example a
notebook or studio environment that injects one). Adapters that support a
managed credential receive such a source at construction time and ask it for a
key only when the user configured none. Nothing here assumes one exists.
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from dotenv import load_dotenv


@runtime_checkable
class CredentialSource(Protocol):
    """Anything able to *try* to produce a credential."""

    def try_acquire_credential(self) -> str | None:
        """Return a credential, or ``None`` when none is available."""
        ...


class EnvironmentCredentialSource:
    """Reads the managed credential from the process environment (and `.env`)."""

    def __init__(self, variable: str = 'API_KEY', *, use_dotenv: bool = True) -> None:
        self._variable = variable
        self._use_dotenv = use_dotenv

    def try_acquire_credential(self) -> str | None:
        if self._use_dotenv:
            load_dotenv()
        value = os.getenv(self._variable, '').strip()
        return value or None

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f'<{self.__class__.__name__} variable={self._variable!r}>'
