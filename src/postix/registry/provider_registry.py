"""registry.provider_registry

Maps provider slugs (``ProviderIdentity`` values such as "groq") to the
adapter class implementing that provider.

Adapter modules register themselves on the module-level `provider_registry`
when imported; `load_builtin_adapters()` imports the shipped ones on demand so
this module never pulls in an SDK.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from postix.core.exceptions import ProviderNotFoundError

if TYPE_CHECKING:
    from postix.core.abc import AbstractPostClient

#: Modules whose import registers the shipped adapters.
BUILTIN_ADAPTER_MODULES: tuple[str, ...] = (
    'postix.adapters.gemini_adapter',
    'postix.adapters.openai_compatible',
    'postix.adapters.anthropic_adapter',
)


class ProviderRegistry:
    """Provider slug → adapter class lookup."""

    def __init__(self) -> None:
        self._adapters: dict[str, type[AbstractPostClient]] = {}

    def register(self, provider_key: str, adapter_cls: type[AbstractPostClient]) -> None:
        """Register *adapter_cls* for *provider_key* (case-insensitive)."""
        # Late import: adapters import this module at load time.
        from postix.core.abc import AbstractPostClient

        if not (isinstance(adapter_cls, type) and issubclass(adapter_cls, AbstractPostClient)):
            raise TypeError('adapter_cls must subclass AbstractPostClient')
        self._adapters[str(provider_key).lower()] = adapter_cls

    def get_adapter_cls(self, provider_key: str) -> type[AbstractPostClient]:
        """Return the adapter class for *provider_key*.

        Raises
        ------
        ProviderNotFoundError
            If nothing is registered under that key.

        """
        try:
            return self._adapters[str(provider_key).lower()]
        except KeyError as exc:
            raise ProviderNotFoundError(f'Unsupported provider: {provider_key}') from exc

    def available_providers(self) -> list[str]:
        return sorted(self._adapters)


def load_builtin_adapters() -> None:
    """Import the shipped adapter modules so they register themselves."""
    for module_name in BUILTIN_ADAPTER_MODULES:
        importlib.import_module(module_name)


provider_registry = ProviderRegistry()
