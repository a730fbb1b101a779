"""
Resource lifecycle - Create/Read/Update/Delete/Exists for any resource kind.

A resource is either Absent (no identity) or Present (identity set and
exactly one remote record with that id). A record that disappeared
remotely is a normal outcome of Read and Delete, not an error.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from client import Transport
from exceptions import UpdateError, ValidationError
from identity import format_identity, parse_identity, resolve_identity
from pagination import collect_all
from resources.base import ResourceKind
from resources.changeset import build_changeset
from resources.fields import DirtyPredicate, build_payload, read_record
from state import DeclaredState
from validation import validate_declared_state

logger = logging.getLogger(__name__)


class ReconcileAction(Enum):
    """What a reconcile() call did to converge a resource."""

    CREATED = "created"
    UPDATED = "updated"
    REPLACED = "replaced"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass
class ReconcileResult:
    """Result from a reconcile() call."""

    action: ReconcileAction = ReconcileAction.UNCHANGED
    identity: str = ""
    message: str = ""
    changed_fields: List[str] = field(default_factory=list)


class ResourceLifecycle:
    """
    Lifecycle driver for one resource kind.

    Holds no per-resource state: every call takes the DeclaredState of the
    resource it acts on and mutates it in place.
    """

    def __init__(self, kind: ResourceKind, transport: Transport):
        if not kind.manageable:
            raise ValueError(f"Resource kind '{kind.name}' only supports listing")
        self.kind = kind
        self.transport = transport

    async def _fetch(self, identity: str) -> Optional[Dict[str, Any]]:
        """Look up the remote record for an identity, or None if it is gone."""
        parse_identity(identity)
        records = await collect_all(
            self.transport, self.kind.endpoint, params={"id": identity}
        )
        return resolve_identity(identity, records)

    async def create(
        self, state: DeclaredState, is_dirty: Optional[DirtyPredicate] = None
    ) -> DeclaredState:
        """
        Create the remote record and read it back.

        Args:
            state: Declared state of an Absent resource.
            is_dirty: Marks empty fields that must be sent as explicit clears.

        Returns:
            The same state, now Present and normalized to the remote record.

        Raises:
            ValidationError: If the declared state or the payload is rejected.
                The state stays Absent.
        """
        if state.present:
            raise ValueError(
                f"{self.kind.name} {state.id} already exists, use update instead"
            )

        values = state.as_dict()
        is_valid, error = validate_declared_state(self.kind, values)
        if not is_valid:
            raise ValidationError(f"Invalid {self.kind.name}: {error}")

        payload = build_payload(self.kind.fields, values, is_dirty)
        record = await self.transport.create(self.kind.endpoint, payload)

        if record.get("id") is None:
            raise ValidationError(
                f"Create of {self.kind.name} returned no id: {record}"
            )

        state.id = format_identity(record["id"])
        logger.info(f"Created {self.kind.name} {state.id}")

        return await self.read(state)

    async def read(self, state: DeclaredState) -> DeclaredState:
        """
        Refresh declared state from the remote record.

        When the record no longer exists the identity is cleared and the
        resource becomes Absent.
        """
        if not state.present:
            return state

        record = await self._fetch(state.id)
        if record is None:
            logger.info(f"{self.kind.name} {state.id} no longer exists remotely")
            state.clear()
            return state

        state.replace(read_record(self.kind.fields, record))
        return state

    async def update(
        self, state: DeclaredState, is_dirty: Optional[DirtyPredicate] = None
    ) -> DeclaredState:
        """
        Send the changed fields as a partial update and read the result back.

        Args:
            state: Declared state of a Present resource.
            is_dirty: Dirty predicate; defaults to the state's change tracking.

        Raises:
            ConversionError: If the identity is not numeric.
            UpdateError: If the resource has no identity, a force-new field
                changed, or the update is rejected. The state is unchanged.
        """
        if not state.present:
            raise UpdateError(f"Cannot update {self.kind.name} without an identity")

        record_id = parse_identity(state.id)
        is_dirty = is_dirty or state.has_change

        replaced = [f.name for f in self.kind.force_new_fields if is_dirty(f.name)]
        if replaced:
            raise UpdateError(
                f"Changing {', '.join(replaced)} of {self.kind.name} {state.id} "
                f"requires replacement"
            )

        values = state.as_dict()
        is_valid, error = validate_declared_state(self.kind, values)
        if not is_valid:
            raise UpdateError(f"Invalid {self.kind.name}: {error}")

        changes = build_changeset(self.kind.fields, values, is_dirty)
        logger.debug(
            f"Updating {self.kind.name} {state.id}, "
            f"optional changes: {changes.optional_names()}"
        )
        await self.transport.partial_update(
            self.kind.endpoint, record_id, changes.to_payload()
        )
        logger.info(f"Updated {self.kind.name} {state.id}")

        return await self.read(state)

    async def delete(self, state: DeclaredState) -> DeclaredState:
        """
        Delete the remote record if it still exists.

        Deleting an Absent resource is a no-op.
        """
        await self._delete(state)
        return state

    async def _delete(self, state: DeclaredState) -> bool:
        """Delete the remote record; returns whether a delete was issued."""
        if not await self.exists(state):
            state.clear()
            return False

        await self.transport.delete(self.kind.endpoint, parse_identity(state.id))
        logger.info(f"Deleted {self.kind.name} {state.id}")
        state.clear()
        return True

    async def exists(self, state: DeclaredState) -> bool:
        """Whether a remote record matches the state's identity."""
        if not state.present:
            return False
        return await self._fetch(state.id) is not None

    async def import_resource(
        self, state: DeclaredState, identity: str
    ) -> DeclaredState:
        """Adopt an existing remote record by identity."""
        parse_identity(identity)
        state.id = identity
        return await self.read(state)

    async def reconcile(
        self, state: DeclaredState, ensure: str = "present"
    ) -> ReconcileResult:
        """
        Converge the remote record towards the declared state.

        Args:
            state: Declared state of the resource.
            ensure: 'present' to create or update, 'absent' to delete.

        Returns:
            ReconcileResult describing the action taken.
        """
        if ensure == "absent":
            deleted = await self._delete(state)
            action = ReconcileAction.DELETED if deleted else ReconcileAction.UNCHANGED
            return ReconcileResult(action=action)

        if ensure != "present":
            raise ValueError(f"ensure must be 'present' or 'absent', got '{ensure}'")

        if state.present and not await self.exists(state):
            logger.info(
                f"{self.kind.name} {state.id} was deleted remotely, recreating"
            )
            state.clear()

        if not state.present:
            await self.create(state)
            return ReconcileResult(
                action=ReconcileAction.CREATED,
                identity=state.id,
                message=f"Created {self.kind.name} {state.id}",
            )

        changed = [f.name for f in self.kind.fields if state.has_change(f.name)]
        if not changed:
            return ReconcileResult(
                action=ReconcileAction.UNCHANGED,
                identity=state.id,
                message="Up to date",
            )

        if any(f.name in changed for f in self.kind.force_new_fields):
            old_id = state.id
            await self.delete(state)
            await self.create(state)
            return ReconcileResult(
                action=ReconcileAction.REPLACED,
                identity=state.id,
                message=f"Replaced {self.kind.name} {old_id} with {state.id}",
                changed_fields=changed,
            )

        await self.update(state)
        return ReconcileResult(
            action=ReconcileAction.UPDATED,
            identity=state.id,
            message=f"Updated {self.kind.name} {state.id}",
            changed_fields=changed,
        )


async def list_all(
    transport: Transport,
    kind: ResourceKind,
    params: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Fetch the complete collection of a kind."""
    records = await collect_all(transport, kind.endpoint, params=params)
    logger.info(f"Listed {len(records)} records of {kind.name}")
    return records


async def list_document(
    transport: Transport,
    kind: ResourceKind,
    params: Optional[Dict[str, Any]] = None,
) -> str:
    """Fetch the complete collection of a kind as one JSON document."""
    return json.dumps(await list_all(transport, kind, params=params))
