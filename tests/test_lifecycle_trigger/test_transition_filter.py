"""
Tests for the transition filter.
"""

import pytest

from lifecycle_trigger.transition_filter import has_state_changed, should_notify
from registry.models import RegistrationSnapshot


def snap(state):
    return RegistrationSnapshot(state=state, responsible_party="U1", name="REG-1")


class TestShouldNotify:
    """Tests for should_notify."""

    @pytest.mark.parametrize("state", [None, "planned_state1__c", "unknown__c", ""])
    def test_equal_states_do_not_notify(self, state):
        assert should_notify(snap(state), snap(state)) is False

    def test_equal_by_value_not_identity(self):
        old = "".join(["closed", "_state__c"])
        new = "closed_state__c"

        assert should_notify(snap(old), snap(new)) is False

    @pytest.mark.parametrize("before,after", [
        (None, "approved_state1__c"),
        ("planned_state1__c", None),
    ])
    def test_one_missing_state_does_not_notify(self, before, after):
        assert should_notify(snap(before), snap(after)) is False

    @pytest.mark.parametrize("before,after", [
        ("planned_state1__c", "approved_state1__c"),
        ("approved_state1__c", "renewal_state__c"),
        ("", "closed_state__c"),
    ])
    def test_changed_states_notify(self, before, after):
        assert should_notify(snap(before), snap(after)) is True

    def test_other_field_changes_ignored(self):
        before = RegistrationSnapshot(state="closed_state__c", responsible_party="U1", name="A")
        after = RegistrationSnapshot(state="closed_state__c", responsible_party="U2", name="B")

        assert should_notify(before, after) is False

    def test_empty_snapshots(self):
        assert should_notify(RegistrationSnapshot(), RegistrationSnapshot()) is False


def test_has_state_changed_on_raw_codes():
    assert has_state_changed("a", "b") is True
    assert has_state_changed("a", "a") is False
    assert has_state_changed(None, None) is False
