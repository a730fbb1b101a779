"""
Field projection between remote records and declared state.

Remote records carry nested reference stubs ({"id": 7, "display": ...}),
choice wrappers ({"value": "active", "label": "Active"}) and lists of ids
or tag stubs. Declared state is flat: references are numeric ids, choices
are plain strings, and "no reference" is the zero sentinel of the field
(0 or ""). This module converts in both directions.

On the write path each field is first classified into an explicit
FieldValue (unset, cleared or set) so that an untouched empty field is never
confused with a field the caller deliberately emptied.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

DirtyPredicate = Callable[[str], bool]


class FieldKind(Enum):
    """How a field is represented on the remote side."""

    SCALAR = "scalar"
    REFERENCE = "reference"
    CHOICE = "choice"
    ID_SET = "id_set"
    TAGS = "tags"


class FieldState(Enum):
    """Write-side state of a single field."""

    UNSET = "unset"
    CLEARED = "cleared"
    SET = "set"


@dataclass(frozen=True)
class FieldValue:
    """A field value as it will be transmitted: unset, cleared, or set."""

    state: FieldState
    value: Any = None

    @classmethod
    def unset(cls) -> "FieldValue":
        return cls(FieldState.UNSET)

    @classmethod
    def cleared(cls) -> "FieldValue":
        return cls(FieldState.CLEARED)

    @classmethod
    def of(cls, value: Any) -> "FieldValue":
        return cls(FieldState.SET, value)

    @property
    def is_unset(self) -> bool:
        return self.state is FieldState.UNSET


@dataclass(frozen=True)
class Field:
    """
    Contract for one declared field.

    Attributes:
        name: Field name in declared state.
        kind: Remote representation of the field.
        type: JSON type of scalar and choice values ('string', 'integer', 'boolean').
        required: Required fields are always transmitted.
        default: Value assumed when the declared state leaves the field out.
        force_new: Changing the field requires destroying and recreating
            the remote record.
        remote_name: Attribute name on the remote side, if different.
        read_default: Value read back when the remote value is empty.
        choices: Allowed values of a CHOICE field.
        schema: Extra JSON Schema keywords for validation.
    """

    name: str
    kind: FieldKind = FieldKind.SCALAR
    type: str = "string"
    required: bool = False
    default: Any = None
    force_new: bool = False
    remote_name: Optional[str] = None
    read_default: Any = None
    choices: Tuple[str, ...] = ()
    schema: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def attribute(self) -> str:
        """Name of the attribute on the remote record."""
        return self.remote_name or self.name

    @property
    def zero(self) -> Any:
        """Sentinel standing in for "no value" in declared state."""
        if self.kind in (FieldKind.ID_SET, FieldKind.TAGS):
            return []
        if self.kind is FieldKind.REFERENCE:
            return 0
        return {"integer": 0, "boolean": False}.get(self.type, "")

    def is_zero(self, value: Any) -> bool:
        if value is None:
            return True
        if self.kind in (FieldKind.ID_SET, FieldKind.TAGS):
            return len(value) == 0
        return value == self.zero

    def declared(self, values: Dict[str, Any]) -> Any:
        """Value of this field in declared state, falling back to the default."""
        value = values.get(self.name)
        if value is not None:
            return value
        if self.default is not None:
            return self.default
        return self.zero


# Set-valued fields


def _tag(item: Any) -> Dict[str, str]:
    if isinstance(item, dict):
        name = item.get("name", "")
        return {"name": name, "slug": item.get("slug", name)}
    return {"name": str(item), "slug": str(item)}


def normalize_ids(items: Optional[Iterable[Any]]) -> List[int]:
    """Sorted, de-duplicated ids from ids or reference stubs."""
    ids = set()
    for item in items or []:
        if isinstance(item, dict):
            item = item.get("id")
        if item is not None:
            ids.add(int(item))
    return sorted(ids)


def normalize_tags(items: Optional[Iterable[Any]]) -> List[Dict[str, str]]:
    """Sorted, de-duplicated {name, slug} tags."""
    unique = {(t["name"], t["slug"]) for t in map(_tag, items or [])}
    return [{"name": name, "slug": slug} for name, slug in sorted(unique)]


def values_equal(a: Any, b: Any) -> bool:
    """
    Compare two declared values.

    Collections compare as sets: order and duplicates are ignored.
    """
    if isinstance(a, (list, tuple, set, frozenset)) and isinstance(
        b, (list, tuple, set, frozenset)
    ):
        return _as_set(a) == _as_set(b)
    return a == b


def _as_set(items: Iterable[Any]) -> frozenset:
    return frozenset(
        tuple(sorted(item.items())) if isinstance(item, dict) else item
        for item in items
    )


# Read path


def read_field(f: Field, record: Dict[str, Any]) -> Any:
    """Project one remote attribute onto its declared-state value."""
    raw = record.get(f.attribute)

    if f.kind is FieldKind.REFERENCE:
        if raw is None:
            return f.zero
        if isinstance(raw, dict):
            raw = raw.get("id")
        return f.zero if raw is None else int(raw)

    if f.kind is FieldKind.CHOICE:
        if isinstance(raw, dict):
            raw = raw.get("value")
        return f.zero if raw is None else raw

    if f.kind is FieldKind.ID_SET:
        return normalize_ids(raw)

    if f.kind is FieldKind.TAGS:
        return normalize_tags(raw)

    if raw is None or raw == "":
        if f.read_default is not None:
            return f.read_default
        return f.zero
    return raw


def read_record(fields: Iterable[Field], record: Dict[str, Any]) -> Dict[str, Any]:
    """Project a remote record onto a complete declared-state mapping."""
    return {f.name: read_field(f, record) for f in fields}


# Write path


def classify(f: Field, value: Any, dirty: bool = False) -> FieldValue:
    """
    Decide how a declared value is transmitted.

    Required fields and non-empty values are sent as they are. An empty
    optional field is sent as an explicit clear only when it was changed;
    otherwise it is left out so the remote value stays untouched.
    """
    if f.required or not f.is_zero(value):
        return FieldValue.of(value)
    if dirty:
        return FieldValue.cleared()
    return FieldValue.unset()


def encode(f: Field, fv: FieldValue) -> Any:
    """Wire value of a classified field. Must not be called for UNSET."""
    if fv.state is FieldState.CLEARED:
        if f.kind in (FieldKind.ID_SET, FieldKind.TAGS):
            return []
        if f.kind is FieldKind.REFERENCE:
            return None
        if f.type == "string":
            return ""
        if f.type == "boolean":
            return False
        return None

    value = fv.value
    if f.kind is FieldKind.REFERENCE:
        return int(value)
    if f.kind is FieldKind.ID_SET:
        return normalize_ids(value)
    if f.kind is FieldKind.TAGS:
        return normalize_tags(value)
    return value


def build_payload(
    fields: Iterable[Field],
    values: Dict[str, Any],
    is_dirty: Optional[DirtyPredicate] = None,
) -> Dict[str, Any]:
    """
    Build a create payload from declared state.

    A field is included when it is required, holds a non-empty value, or
    was explicitly marked dirty.
    """
    payload: Dict[str, Any] = {}
    for f in fields:
        dirty = bool(is_dirty and is_dirty(f.name))
        fv = classify(f, f.declared(values), dirty)
        if not fv.is_unset:
            payload[f.attribute] = encode(f, fv)
    return payload
