"""
Shared infrastructure for the registration lifecycle notifier.

This package contains the records and collaborators the trigger works with:
- Domain models (snapshots, change events, payloads, directory users)
- State labels and the notification message template
- JSON-backed user directory with structured queries
- Mock notification transport
- Settings
"""

from registry.models import (
    RegistrationSnapshot,
    ChangeEvent,
    DirectoryUser,
    ResolvedIdentity,
    NotificationPayload,
)
from registry.errors import (
    LifecycleNotificationError,
    ResolutionError,
    InvalidPartyError,
    PartyNotFoundError,
    TransportError,
)
from registry.labels import STATE_LABELS, describe_state, render_lifecycle_message
from registry.directory import DirectoryQuery, UserDirectory
from registry.transport import InMemoryTransport
from registry.settings import TriggerSettings, get_settings

__all__ = [
    "RegistrationSnapshot",
    "ChangeEvent",
    "DirectoryUser",
    "ResolvedIdentity",
    "NotificationPayload",
    "LifecycleNotificationError",
    "ResolutionError",
    "InvalidPartyError",
    "PartyNotFoundError",
    "TransportError",
    "STATE_LABELS",
    "describe_state",
    "render_lifecycle_message",
    "DirectoryQuery",
    "UserDirectory",
    "InMemoryTransport",
    "TriggerSettings",
    "get_settings",
]
