"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import AsyncMock

from client import Page, Transport


def page(results, next=None):
    """Build a listing page."""
    return Page(results=list(results), next=next, count=None)


@pytest.fixture
def mock_transport():
    """Create a mock transport with an empty listing."""
    transport = AsyncMock(spec=Transport)
    transport.list = AsyncMock(return_value=page([]))
    transport.create = AsyncMock()
    transport.partial_update = AsyncMock(return_value={})
    transport.delete = AsyncMock(return_value=None)
    return transport


@pytest.fixture
def device_record():
    """Device record as returned by the inventory API."""
    return {
        "id": 42,
        "name": "edge-router-1",
        "asset_tag": None,
        "cluster": None,
        "device_role": {"id": 3, "display": "Router"},
        "device_type": {"id": 8, "display": "MX204"},
        "face": {"value": "front", "label": "Front"},
        "parent_device": None,
        "position": None,
        "platform": None,
        "primary_ip4": None,
        "primary_ip6": None,
        "rack": None,
        "serial": "",
        "site": {"id": 1, "display": "ams1"},
        "status": {"value": "active", "label": "Active"},
        "tenant": None,
        "virtual_chassis": None,
    }


@pytest.fixture
def interface_record():
    """Interface record as returned by the inventory API."""
    return {
        "id": 17,
        "device": {"id": 42, "display": "edge-router-1"},
        "name": "xe-0/0/0",
        "type": {"value": "10gbase-x-sfpp", "label": "SFP+ (10GE)"},
        "enabled": True,
        "lag": None,
        "mtu": 9000,
        "mac_address": None,
        "mgmt_only": False,
        "description": "",
        "connection_status": None,
        "mode": {"value": "tagged", "label": "Tagged"},
        "untagged_vlan": {"id": 100, "display": "mgmt"},
        "tagged_vlans": [{"id": 30}, {"id": 10}, {"id": 20}],
        "tags": [
            {"name": "uplink", "slug": "uplink"},
            {"name": "core", "slug": "core"},
        ],
    }
