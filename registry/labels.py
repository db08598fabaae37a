"""
State labels and the lifecycle change message.

The registration lifecycle uses internal state codes (e.g. planned_state1__c).
Notifications show a human label instead. Codes without a label are shown
as-is, since new lifecycle states can be added on the host at any time.

Design decisions:
- The label table is an immutable mapping, read-only at runtime
- Extra labels from configuration are layered over the defaults into a new
  mapping rather than mutating the shared one
- The message is a single str.format template, like the other templates
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# State label table
# =============================================================================

STATE_LABELS: Mapping[str, str] = MappingProxyType({
    "planned_state1__c": "Planned",
    "approved_state1__c": "Approved/Authorized",
    "closed_state__c": "Closed",
    "expired_state__c": "Expired",
    "on_hold_state__c": "On Hold",
    "suspended_state__c": "Suspended",
    "withdrawn_state1__c": "Withdrawn",
    "transferred_state__c": "Transferred",
})


def build_label_table(extra: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """
    Return the default label table with `extra` entries layered on top.

    Returns the shared default table when there is nothing to add.
    """
    if not extra:
        return STATE_LABELS
    merged = dict(STATE_LABELS)
    merged.update(extra)
    return MappingProxyType(merged)


def describe_state(state: str, labels: Mapping[str, str] = STATE_LABELS) -> str:
    """Get the label for a state code, or the code itself if it has none."""
    return labels.get(state, state)


# =============================================================================
# Message template
# =============================================================================

DEFAULT_SUBJECT = "Registration Lifecycle Change Notification"
DEFAULT_MESSAGE = (
    "Registration Lifecycle changed from {old_label} to {new_label} "
    "on registration: {entity_name}"
)


@dataclass(frozen=True)
class MessageTemplate:
    """
    Subject and body for the lifecycle change notification.

    The subject is fixed; the body is filled with the translated labels
    and the registration name. The same text is used for email and in-app.
    """
    subject: str = DEFAULT_SUBJECT
    body: str = DEFAULT_MESSAGE

    def render(self, old_label: str, new_label: str, entity_name: str) -> tuple[str, str]:
        """
        Render the template.

        Returns:
            Tuple of (subject, body)
        """
        return (
            self.subject,
            self.body.format(
                old_label=old_label,
                new_label=new_label,
                entity_name=entity_name,
            ),
        )


def render_lifecycle_message(
    old_state: str,
    new_state: str,
    entity_name: str,
    labels: Mapping[str, str] = STATE_LABELS,
    template: Optional[MessageTemplate] = None,
) -> tuple[str, str]:
    """
    Translate both state codes and render the notification text.

    Args:
        old_state: State code before the update
        new_state: State code after the update
        entity_name: Registration name shown in the message
        labels: State code -> label table
        template: Message template (defaults to the standard one)

    Returns:
        (subject, body)
    """
    template = template or MessageTemplate()
    return template.render(
        old_label=describe_state(old_state, labels),
        new_label=describe_state(new_state, labels),
        entity_name=entity_name,
    )
