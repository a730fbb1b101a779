"""
Declared-state store.

Holds the desired field values of one resource instance together with its
persisted identity, and tracks which fields changed since the values were
last synchronized with the remote record.
"""

import copy
from typing import Any, Dict, Optional

from resources.fields import values_equal


class DeclaredState:
    """Desired configuration of one resource plus its identity."""

    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        id: str = "",
        synced: Optional[Dict[str, Any]] = None,
    ):
        self.id = id
        self._values: Dict[str, Any] = dict(values or {})
        # Values as of the last successful read; None until then
        self._synced: Optional[Dict[str, Any]] = (
            copy.deepcopy(synced) if synced is not None else None
        )

    @property
    def present(self) -> bool:
        return bool(self.id)

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def update(self, values: Dict[str, Any]) -> None:
        self._values.update(values)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def has_change(self, name: str) -> bool:
        """
        Whether a field differs from its last synchronized value.

        Before the first synchronization every field that holds a value
        counts as changed.
        """
        if self._synced is None:
            return self._values.get(name) is not None
        return not values_equal(self._values.get(name), self._synced.get(name))

    def changed_fields(self) -> Dict[str, Any]:
        return {name: v for name, v in self._values.items() if self.has_change(name)}

    def mark_synced(self) -> None:
        """Record the current values as matching the remote record."""
        self._synced = copy.deepcopy(self._values)

    def replace(self, values: Dict[str, Any]) -> None:
        """Overwrite all values with a projected remote record and mark synced."""
        self._values = dict(values)
        self.mark_synced()

    def clear(self) -> None:
        """Forget the identity and the synchronized snapshot."""
        self.id = ""
        self._synced = None

    def __repr__(self) -> str:
        return f"DeclaredState(id={self.id!r}, values={self._values!r})"
