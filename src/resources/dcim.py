"""DCIM resource kinds: sites, racks, devices, interfaces, cables and ports."""

from resources.base import ResourceKind
from resources.fields import Field, FieldKind

REF = FieldKind.REFERENCE
CHOICE = FieldKind.CHOICE


def _name(max_length: int, required: bool = True) -> Field:
    return Field(
        "name",
        required=required,
        schema={"minLength": 1, "maxLength": max_length},
    )


def _text(name: str, max_length: int = 50, **kwargs) -> Field:
    return Field(name, schema={"minLength": 1, "maxLength": max_length}, **kwargs)


def _ref(name: str, required: bool = False, **kwargs) -> Field:
    # device_id <-> device
    return Field(
        name,
        kind=REF,
        required=required,
        remote_name=name[: -len("_id")],
        **kwargs,
    )


TERMINATION_TYPES = (
    "dcim.consoleport",
    "dcim.consoleserverport",
    "dcim.frontport",
    "dcim.rearport",
    "dcim.powerport",
    "dcim.poweroutlet",
    "dcim.interface",
)

SITE = ResourceKind(
    name="dcim_site",
    endpoint="dcim/sites",
    description="Site",
    fields=(
        _name(50),
        Field(
            "slug",
            required=True,
            schema={"pattern": "^[-a-zA-Z0-9_]{1,50}$"},
        ),
        Field(
            "status",
            kind=CHOICE,
            default="active",
            choices=("active", "planned", "retired"),
        ),
        _ref("tenant_id"),
    ),
)

RACK = ResourceKind(
    name="dcim_rack",
    endpoint="dcim/racks",
    description="Rack",
    fields=(
        _text("asset_tag"),
        Field("desc_units", type="boolean"),
        _text("facility_id"),
        _ref("group_id"),
        _name(50),
        _ref("role_id"),
        _text("serial"),
        _ref("site_id", required=True),
        Field(
            "status",
            kind=CHOICE,
            default="active",
            choices=("reserved", "available", "planned", "active", "deprecated"),
        ),
        _ref("tenant_id"),
        Field(
            "u_height",
            type="integer",
            schema={"minimum": 1, "maximum": 100},
        ),
    ),
)

DEVICE = ResourceKind(
    name="dcim_device",
    endpoint="dcim/devices",
    description="Device",
    fields=(
        _text("asset_tag"),
        _ref("cluster_id"),
        _ref("device_role_id", required=True),
        _ref("device_type_id", required=True),
        Field("face", kind=CHOICE, default="front", choices=("front", "rear")),
        _name(50),
        _ref("parent_device_id"),
        Field(
            "position",
            type="integer",
            schema={"minimum": 1, "maximum": 32767},
        ),
        _ref("platform_id"),
        _ref("primary_ip4_id"),
        _ref("primary_ip6_id"),
        _ref("rack_id"),
        _text("serial"),
        _ref("site_id", required=True),
        Field(
            "status",
            kind=CHOICE,
            default="active",
            choices=(
                "offline",
                "active",
                "planned",
                "staged",
                "failed",
                "inventory",
                "decommissioning",
            ),
        ),
        _ref("tenant_id"),
        _ref("virtual_chassis_id"),
    ),
)

INTERFACE = ResourceKind(
    name="dcim_interface",
    endpoint="dcim/interfaces",
    description="Device interface",
    fields=(
        _ref("device_id", required=True),
        _name(64),
        Field("type", kind=CHOICE, required=True),
        Field("enabled", type="boolean", default=True),
        _ref("lag_id"),
        Field(
            "mtu",
            type="integer",
            schema={"minimum": 1, "maximum": 65536},
        ),
        Field(
            "mac_address",
            schema={"pattern": "^([A-Z0-9]{2}:){5}[A-Z0-9]{2}$"},
        ),
        Field("mgmt_only", type="boolean", default=False),
        Field(
            "description",
            default=" ",
            read_default=" ",
            schema={"minLength": 1, "maxLength": 200},
        ),
        Field("connection_status", kind=CHOICE, type="boolean", default=False),
        Field(
            "mode",
            kind=CHOICE,
            choices=("access", "tagged", "tagged-all"),
        ),
        _ref("untagged_vlan_id"),
        Field("tagged_vlans", kind=FieldKind.ID_SET),
        Field("tag", kind=FieldKind.TAGS, remote_name="tags"),
    ),
)

CABLE = ResourceKind(
    name="dcim_cable",
    endpoint="dcim/cables",
    description="Cable between two terminations",
    fields=(
        Field(
            "status",
            kind=CHOICE,
            default="connected",
            choices=("connected", "planned", "decommissioning"),
        ),
        Field(
            "termination_a_id",
            type="integer",
            required=True,
            force_new=True,
        ),
        Field(
            "termination_a_type",
            required=True,
            schema={"enum": list(TERMINATION_TYPES)},
        ),
        Field(
            "termination_b_id",
            type="integer",
            required=True,
            force_new=True,
        ),
        Field(
            "termination_b_type",
            required=True,
            schema={"enum": list(TERMINATION_TYPES)},
        ),
    ),
)

# Listing-only kinds, exported as JSON documents
CONSOLE_PORTS = ResourceKind(
    name="dcim_console_ports",
    endpoint="dcim/console-ports",
    description="Console ports",
)

CONSOLE_SERVER_PORTS = ResourceKind(
    name="dcim_console_server_ports",
    endpoint="dcim/console-server-ports",
    description="Console server ports",
)

POWER_PORTS = ResourceKind(
    name="dcim_power_ports",
    endpoint="dcim/power-ports",
    description="Power ports",
)
