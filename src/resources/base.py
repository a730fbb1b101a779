"""
Resource kinds - the per-kind field contract consumed by the lifecycle driver.

A ResourceKind names the API collection a kind lives in and declares its
fields once. Every kind is reconciled by the same generic lifecycle; kinds
without fields are only used for bulk listing.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from resources.fields import Field, FieldKind

_SCALAR_TYPES = {"string", "integer", "boolean"}


@dataclass(frozen=True)
class ResourceKind:
    """Field contract and API location of one resource kind."""

    name: str
    endpoint: str
    fields: Tuple[Field, ...] = ()
    description: str = ""

    def __post_init__(self):
        names = [f.name for f in self.fields]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(
                f"Resource kind '{self.name}' declares duplicate fields: "
                f"{', '.join(sorted(duplicates))}"
            )
        for f in self.fields:
            if f.type not in _SCALAR_TYPES:
                raise ValueError(
                    f"Field '{f.name}' of '{self.name}' has unknown type '{f.type}'"
                )

    @property
    def manageable(self) -> bool:
        """Whether the kind supports the full lifecycle (not only listing)."""
        return bool(self.fields)

    def field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"Resource kind '{self.name}' has no field '{name}'")

    @property
    def required_fields(self) -> List[Field]:
        return [f for f in self.fields if f.required]

    @property
    def force_new_fields(self) -> List[Field]:
        return [f for f in self.fields if f.force_new]

    def defaults(self) -> Dict[str, Any]:
        """Declared state of a fresh instance: defaults, or zero sentinels."""
        return {f.name: f.declared({}) for f in self.fields}

    def schema(self) -> Dict[str, Any]:
        """JSON Schema (Draft 7) for declared state of this kind."""
        return {
            "type": "object",
            "required": [f.name for f in self.required_fields],
            "properties": {f.name: _field_schema(f) for f in self.fields},
        }


def _field_schema(f: Field) -> Dict[str, Any]:
    if f.kind is FieldKind.REFERENCE:
        schema: Dict[str, Any] = {"type": "integer", "minimum": 0}
    elif f.kind is FieldKind.CHOICE:
        schema = {"type": f.type}
        if f.choices:
            schema["enum"] = list(f.choices)
    elif f.kind is FieldKind.ID_SET:
        schema = {"type": "array", "items": {"type": "integer"}}
    elif f.kind is FieldKind.TAGS:
        schema = {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "slug"],
                "properties": {
                    "name": {"type": "string"},
                    "slug": {"type": "string"},
                },
            },
        }
    else:
        schema = {"type": f.type}
    schema.update(f.schema)
    return schema
