"""
Record change events delivered by the host platform.

The host fires a trigger with a batch of record changes, each carrying the
old and new field values of one record. This module defines the event type
names and turns host documents into ChangeEvent objects.

Host batch document:
    {
        "object": "registration__rim",
        "event": "AFTER_UPDATE",
        "changes": [
            {"old": {"state__v": "...", ...}, "new": {"state__v": "...", ...}}
        ]
    }
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from registry.models import ChangeEvent, RegistrationSnapshot


# =============================================================================
# Event Type Constants
# =============================================================================

class RecordEvents:
    """
    Record trigger event names used by the host.

    The lifecycle trigger only reacts to AFTER_UPDATE.
    """
    BEFORE_INSERT = "BEFORE_INSERT"
    AFTER_INSERT = "AFTER_INSERT"
    BEFORE_UPDATE = "BEFORE_UPDATE"
    AFTER_UPDATE = "AFTER_UPDATE"
    BEFORE_DELETE = "BEFORE_DELETE"
    AFTER_DELETE = "AFTER_DELETE"


REGISTRATION_OBJECT = "registration__rim"


# =============================================================================
# Host documents
# =============================================================================

class HostRecordChange(BaseModel):
    """One record change as sent by the host."""
    old: dict[str, Any] = Field(default_factory=dict, description="Field values before the update")
    new: dict[str, Any] = Field(default_factory=dict, description="Field values after the update")


class HostBatch(BaseModel):
    """A trigger invocation: one object, one event type, many changes."""
    object: str = Field(default=REGISTRATION_OBJECT)
    event: str = Field(default=RecordEvents.AFTER_UPDATE)
    changes: list[HostRecordChange] = Field(default_factory=list)


# =============================================================================
# ChangeEvent construction
# =============================================================================

def registration_changed(
    old_fields: Mapping[str, Any],
    new_fields: Mapping[str, Any],
    field_map: Optional[Mapping[str, str]] = None,
    event_type: str = RecordEvents.AFTER_UPDATE,
    object_name: str = REGISTRATION_OBJECT,
) -> ChangeEvent:
    """
    Create a ChangeEvent from host field maps.

    Args:
        old_fields: Field values before the update
        new_fields: Field values after the update
        field_map: Snapshot attribute -> host field name
        event_type: Record event that fired
        object_name: Host object the record belongs to
    """
    return ChangeEvent(
        before=RegistrationSnapshot.from_fields(old_fields, field_map),
        after=RegistrationSnapshot.from_fields(new_fields, field_map),
        event_type=event_type,
        object_name=object_name,
    )


def batch_from_host(
    batch: HostBatch,
    field_map: Optional[Mapping[str, str]] = None,
) -> list[ChangeEvent]:
    """Convert a parsed host batch into change events."""
    return [
        registration_changed(
            change.old,
            change.new,
            field_map=field_map,
            event_type=batch.event,
            object_name=batch.object,
        )
        for change in batch.changes
    ]


def batch_from_records(
    document: Mapping[str, Any],
    field_map: Optional[Mapping[str, str]] = None,
) -> list[ChangeEvent]:
    """
    Parse a raw host batch document.

    Raises:
        pydantic.ValidationError: If the document is malformed
    """
    return batch_from_host(HostBatch.model_validate(document), field_map=field_map)
