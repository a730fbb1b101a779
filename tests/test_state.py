"""Unit tests for state.py - declared-state store."""

from state import DeclaredState


class TestDeclaredState:
    """Tests for DeclaredState class."""

    def test_default_values(self):
        state = DeclaredState()
        assert state.id == ""
        assert state.present is False
        assert state.as_dict() == {}

    def test_get_set(self):
        state = DeclaredState({"name": "r1"})
        state.set("serial", "X1")
        assert state.get("name") == "r1"
        assert state.get("serial") == "X1"
        assert state.get("missing", 7) == 7

    def test_unsynced_values_are_changes(self):
        state = DeclaredState({"name": "r1", "rack_id": None})
        assert state.has_change("name") is True
        assert state.has_change("rack_id") is False

    def test_no_change_after_sync(self):
        state = DeclaredState({"name": "r1"}, id="1")
        state.mark_synced()
        assert state.has_change("name") is False
        assert state.changed_fields() == {}

    def test_change_after_sync(self):
        state = DeclaredState({"name": "r1"}, id="1")
        state.mark_synced()
        state.set("name", "r2")
        assert state.changed_fields() == {"name": "r2"}

    def test_set_reordering_is_not_a_change(self):
        state = DeclaredState({"tagged_vlans": [10, 20]}, id="1")
        state.mark_synced()
        state.set("tagged_vlans", [20, 10, 10])
        assert state.has_change("tagged_vlans") is False

    def test_synced_snapshot_is_a_copy(self):
        state = DeclaredState({"tagged_vlans": [10]}, id="1")
        state.mark_synced()
        state.get("tagged_vlans").append(20)
        assert state.has_change("tagged_vlans") is True

    def test_replace_overwrites_and_syncs(self):
        state = DeclaredState({"name": "r1", "serial": "X"}, id="1")
        state.replace({"name": "r1", "rack_id": 0})
        assert state.as_dict() == {"name": "r1", "rack_id": 0}
        assert state.changed_fields() == {}

    def test_clear_forgets_identity(self):
        state = DeclaredState({"name": "r1"}, id="5", synced={"name": "r1"})
        state.clear()
        assert state.present is False
        assert state.get("name") == "r1"
        assert state.has_change("name") is True
