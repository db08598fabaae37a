"""
Registration lifecycle trigger.

This package reacts to registration state changes:
- The transition filter decides whether a change is worth a notification
- The audience resolver looks up the responsible person in the directory
- The dispatcher renders and sends the notification
- The trigger runs a batch of changes, isolating failures per change
"""

from lifecycle_trigger.transition_filter import should_notify
from lifecycle_trigger.resolver import AudienceResolver, is_valid_party
from lifecycle_trigger.dispatcher import DispatchOutcome, DispatchStatus, NotificationDispatcher
from lifecycle_trigger.trigger import BatchReport, RegistrationLifecycleTrigger
from lifecycle_trigger.events import RecordEvents, registration_changed, batch_from_records

__all__ = [
    "should_notify",
    "AudienceResolver",
    "is_valid_party",
    "DispatchOutcome",
    "DispatchStatus",
    "NotificationDispatcher",
    "BatchReport",
    "RegistrationLifecycleTrigger",
    "RecordEvents",
    "registration_changed",
    "batch_from_records",
]
