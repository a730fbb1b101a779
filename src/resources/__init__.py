"""
Resource kinds package.

Each kind declares its field contract once; the lifecycle driver in
lifecycle.py reconciles every kind the same way.
"""

from resources.base import ResourceKind
from resources.changeset import ChangeSet, build_changeset
from resources.dcim import (
    CABLE,
    CONSOLE_PORTS,
    CONSOLE_SERVER_PORTS,
    DEVICE,
    INTERFACE,
    POWER_PORTS,
    RACK,
    SITE,
)
from resources.fields import Field, FieldKind, FieldState, FieldValue
from resources.virtualization import CLUSTER

BUILTIN_KINDS = (
    SITE,
    RACK,
    DEVICE,
    INTERFACE,
    CABLE,
    CLUSTER,
    CONSOLE_PORTS,
    CONSOLE_SERVER_PORTS,
    POWER_PORTS,
)

__all__ = [
    "BUILTIN_KINDS",
    "ChangeSet",
    "Field",
    "FieldKind",
    "FieldState",
    "FieldValue",
    "ResourceKind",
    "build_changeset",
]
