"""
Tests for state labels and the lifecycle message template.
"""

import pytest

from registry.labels import (
    DEFAULT_SUBJECT,
    STATE_LABELS,
    MessageTemplate,
    build_label_table,
    describe_state,
    render_lifecycle_message,
)


class TestDescribeState:
    """Tests for state code translation."""

    @pytest.mark.parametrize("code,label", [
        ("planned_state1__c", "Planned"),
        ("approved_state1__c", "Approved/Authorized"),
        ("closed_state__c", "Closed"),
        ("expired_state__c", "Expired"),
        ("on_hold_state__c", "On Hold"),
        ("suspended_state__c", "Suspended"),
        ("withdrawn_state1__c", "Withdrawn"),
        ("transferred_state__c", "Transferred"),
    ])
    def test_known_codes(self, code, label):
        assert describe_state(code) == label

    @pytest.mark.parametrize("code", ["renewal_state__c", "", "Planned", "PLANNED_STATE1__C"])
    def test_unknown_codes_pass_through(self, code):
        """Test that codes without a label are returned unchanged."""
        assert describe_state(code) == code

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            STATE_LABELS["new_state__c"] = "New"


class TestBuildLabelTable:
    """Tests for layering configured labels over the defaults."""

    def test_no_extra_returns_defaults(self):
        assert build_label_table() is STATE_LABELS
        assert build_label_table({}) is STATE_LABELS

    def test_extra_labels_added_and_overridden(self):
        labels = build_label_table({
            "renewal_state__c": "In Renewal",
            "closed_state__c": "Closed (Final)",
        })

        assert describe_state("renewal_state__c", labels) == "In Renewal"
        assert describe_state("closed_state__c", labels) == "Closed (Final)"
        assert describe_state("planned_state1__c", labels) == "Planned"
        # Defaults untouched
        assert STATE_LABELS["closed_state__c"] == "Closed"
        assert "renewal_state__c" not in STATE_LABELS


class TestMessageTemplate:
    """Tests for MessageTemplate and render_lifecycle_message."""

    def test_render(self):
        subject, body = MessageTemplate().render("Planned", "Closed", "REG-1")

        assert subject == "Registration Lifecycle Change Notification"
        assert body == "Registration Lifecycle changed from Planned to Closed on registration: REG-1"

    def test_render_lifecycle_message_translates_codes(self):
        subject, body = render_lifecycle_message(
            "planned_state1__c", "approved_state1__c", "REG-100",
        )

        assert subject == DEFAULT_SUBJECT
        assert body == (
            "Registration Lifecycle changed from Planned to Approved/Authorized "
            "on registration: REG-100"
        )

    def test_unknown_code_rendered_raw(self):
        _, body = render_lifecycle_message("planned_state1__c", "renewal_state__c", "REG-9")

        assert "from Planned to renewal_state__c" in body

    def test_custom_template(self):
        template = MessageTemplate(subject="Status update", body="{entity_name}: {old_label} -> {new_label}")

        subject, body = render_lifecycle_message(
            "on_hold_state__c", "closed_state__c", "REG-5", template=template,
        )

        assert subject == "Status update"
        assert body == "REG-5: On Hold -> Closed"
