"""
Tests for host batch parsing and change event construction.
"""

import json

import pytest
from pydantic import ValidationError

from lifecycle_trigger.events import (
    RecordEvents,
    batch_from_records,
    registration_changed,
)


class TestRegistrationChanged:

    def test_builds_snapshots(self, planned_reg_100, approved_reg_100):
        event = registration_changed(planned_reg_100, approved_reg_100)

        assert event.before.state == "planned_state1__c"
        assert event.after.state == "approved_state1__c"
        assert event.after.responsible_party == "U1"
        assert event.after.name == "REG-100"
        assert event.event_type == RecordEvents.AFTER_UPDATE
        assert event.object_name == "registration__rim"


class TestBatchFromRecords:

    def test_sample_batch_fixture(self, data_dir):
        with open(data_dir / "sample_batch.json") as f:
            document = json.load(f)

        events = batch_from_records(document)

        assert len(events) == 3
        assert events[0].after.name == "REG-100"
        assert events[1].after.responsible_party == " "
        assert all(e.event_type == "AFTER_UPDATE" for e in events)

    def test_defaults_object_and_event(self):
        events = batch_from_records({"changes": [{"old": {}, "new": {}}]})

        assert events[0].object_name == "registration__rim"
        assert events[0].event_type == "AFTER_UPDATE"

    def test_batch_event_type_applied(self):
        events = batch_from_records({
            "object": "registration__rim",
            "event": "AFTER_INSERT",
            "changes": [{"new": {"state__v": "planned_state1__c"}}],
        })

        assert events[0].event_type == "AFTER_INSERT"
        assert events[0].before.state is None

    def test_empty_batch(self):
        assert batch_from_records({}) == []

    def test_malformed_batch_raises(self):
        with pytest.raises(ValidationError):
            batch_from_records({"changes": "not-a-list"})
