"""Virtualization resource kinds."""

from resources.base import ResourceKind
from resources.dcim import _name, _ref

CLUSTER = ResourceKind(
    name="virtualization_cluster",
    endpoint="virtualization/clusters",
    description="Virtualization cluster",
    fields=(
        _name(50),
        _ref("type_id", required=True),
        _ref("site_id"),
        _ref("tenant_id"),
    ),
)
