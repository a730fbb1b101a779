"""
Change sets - the minimal payload of a partial update.

Required fields are always part of the change set. Optional fields are
included only when the dirty predicate reports a change; everything else
is left out so the remote value stays as it is.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from resources.fields import DirtyPredicate, Field, FieldValue, classify, encode


@dataclass
class ChangeSet:
    """Fields selected for transmission, keyed by declared field name."""

    fields: Dict[str, Field] = field(default_factory=dict)
    values: Dict[str, FieldValue] = field(default_factory=dict)

    @property
    def names(self) -> List[str]:
        return list(self.values)

    def optional_names(self) -> List[str]:
        """Names of non-required fields in the change set."""
        return [name for name in self.values if not self.fields[name].required]

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def to_payload(self) -> Dict[str, Any]:
        """Encode the change set as a partial-update body."""
        return {
            self.fields[name].attribute: encode(self.fields[name], fv)
            for name, fv in self.values.items()
        }


def build_changeset(
    fields: Iterable[Field],
    values: Dict[str, Any],
    is_dirty: DirtyPredicate,
) -> ChangeSet:
    """
    Compute the change set for an update.

    Args:
        fields: Field contract of the resource kind.
        values: Declared state.
        is_dirty: Reports whether a field changed since the last sync.

    Returns:
        The ChangeSet to transmit.
    """
    changes = ChangeSet()
    for f in fields:
        if f.required:
            fv = FieldValue.of(f.declared(values))
        elif is_dirty(f.name):
            fv = classify(f, f.declared(values), dirty=True)
        else:
            continue
        changes.fields[f.name] = f
        changes.values[f.name] = fv
    return changes
