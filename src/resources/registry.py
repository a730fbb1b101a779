"""
Kind Registry - lookup of resource kinds by name.

Handles registration of the built-in kinds and of any additional kinds a
caller declares.
"""

import logging
from typing import Dict, List, Optional

from resources.base import ResourceKind
from validation import validate_contract_schema

logger = logging.getLogger(__name__)


class KindRegistry:
    """Central registry of resource kinds."""

    def __init__(self):
        self._kinds: Dict[str, ResourceKind] = {}
        # Mapping from API endpoint to the kind that manages it
        self._endpoint_to_kind: Dict[str, str] = {}

    def register(self, kind: ResourceKind) -> None:
        """
        Register a resource kind.

        Args:
            kind: The ResourceKind to register

        Raises:
            ValueError: If the name is taken, the endpoint is already managed
                by another kind, or the field contract is not a valid schema
        """
        if kind.name in self._kinds:
            raise ValueError(f"Resource kind '{kind.name}' is already registered")

        is_valid, error = validate_contract_schema(kind.schema())
        if not is_valid:
            raise ValueError(f"Resource kind '{kind.name}': {error}")

        if kind.manageable:
            existing = self._endpoint_to_kind.get(kind.endpoint)
            if existing:
                raise ValueError(
                    f"Endpoint '{kind.endpoint}' is already managed by "
                    f"'{existing}'. Cannot register '{kind.name}'."
                )
            self._endpoint_to_kind[kind.endpoint] = kind.name

        self._kinds[kind.name] = kind
        logger.info(f"Registered resource kind: {kind.name} ({kind.endpoint})")

    def get(self, name: str) -> ResourceKind:
        """
        Get a registered kind by name.

        Raises:
            ValueError: If the kind is not registered
        """
        if name not in self._kinds:
            available = ", ".join(sorted(self._kinds)) or "none"
            raise ValueError(
                f"Unknown resource kind: {name}. Available kinds: {available}"
            )
        return self._kinds[name]

    def has(self, name: str) -> bool:
        return name in self._kinds

    def list_kinds(self) -> List[str]:
        """List all registered kind names."""
        return list(self._kinds.keys())

    def list_manageable(self) -> List[str]:
        """List kinds that support the full lifecycle."""
        return [name for name, kind in self._kinds.items() if kind.manageable]

    def for_endpoint(self, endpoint: str) -> Optional[ResourceKind]:
        name = self._endpoint_to_kind.get(endpoint)
        return self._kinds[name] if name else None


# Global registry instance
_registry: Optional[KindRegistry] = None


def get_registry() -> KindRegistry:
    """Get the global kind registry, with the built-in kinds registered."""
    global _registry
    if _registry is None:
        from resources import BUILTIN_KINDS

        _registry = KindRegistry()
        for kind in BUILTIN_KINDS:
            _registry.register(kind)
    return _registry


def reset_registry() -> None:
    """Reset the global registry (mainly for testing)."""
    global _registry
    _registry = None
