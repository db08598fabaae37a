"""
Domain models for the registration lifecycle notifier.

These models describe the records exchanged with the host platform and the
external collaborators (directory, notification transport).

Design decisions:
- Using Pydantic for validation and serialization
- Snapshots, events and payloads are frozen: they are built once per
  record change and never mutated afterwards
- Host field names (state__v, name__v, ...) are mapped onto Python
  attribute names when a snapshot is built, so the rest of the code never
  deals with platform naming
"""

from typing import Any, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Host field mapping
# =============================================================================

DEFAULT_FIELD_MAP: dict[str, str] = {
    "id": "id",
    "state": "state__v",
    "responsible_party": "responsible_person__c",
    "name": "name__v",
}


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


# =============================================================================
# Record change models
# =============================================================================

class RegistrationSnapshot(BaseModel):
    """
    Field values of a registration record at one point in time.

    Only the fields the trigger reads are kept. Every field may be absent:
    the host can deliver partially populated records.
    """
    id: Optional[str] = Field(default=None, description="Record identifier")
    state: Optional[str] = Field(default=None, description="Lifecycle state code")
    responsible_party: Optional[str] = Field(
        default=None,
        description="Opaque user id of the person accountable for the registration"
    )
    name: Optional[str] = Field(default=None, description="Human-readable registration name")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_fields(
        cls,
        fields: Mapping[str, Any],
        field_map: Optional[Mapping[str, str]] = None,
    ) -> "RegistrationSnapshot":
        """
        Build a snapshot from a host field map.

        Args:
            fields: Raw field name -> value mapping as delivered by the host
            field_map: Attribute name -> host field name (defaults to DEFAULT_FIELD_MAP)

        Unknown host fields are ignored; non-string values are coerced to str.
        """
        field_map = field_map or DEFAULT_FIELD_MAP
        return cls(**{
            attr: _as_optional_str(fields.get(host_field))
            for attr, host_field in field_map.items()
        })


class ChangeEvent(BaseModel):
    """
    One record mutation within a trigger batch.

    `before` and `after` describe the same registration. The event is
    processed exactly once by the trigger.
    """
    before: RegistrationSnapshot
    after: RegistrationSnapshot
    event_type: str = Field(default="AFTER_UPDATE", description="Record event that fired")
    object_name: str = Field(default="registration__rim", description="Host object name")
    event_id: str = Field(default_factory=lambda: str(uuid4()))

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"ChangeEvent({self.object_name}, {self.event_type}, id={self.event_id[:8]})"


# =============================================================================
# Directory models
# =============================================================================

class DirectoryUser(BaseModel):
    """A user record in the identity directory (user__sys on the host)."""
    id: str = Field(..., description="Opaque user identifier")
    username: str = Field(..., description="Login / display name")
    email: Optional[str] = Field(default=None)
    active: bool = Field(default=True)


class ResolvedIdentity(BaseModel):
    """
    Result of resolving a responsible party.

    `party_id` is what notifications are addressed to; `username` is only
    used for logging.
    """
    username: str
    party_id: str

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Notification payload
# =============================================================================

class NotificationPayload(BaseModel):
    """Message handed to the notification transport (email + in-app)."""
    subject: str
    body: str
    in_app_text: str
    recipient_ids: frozenset[str]

    model_config = ConfigDict(frozen=True)

    @field_validator("recipient_ids")
    @classmethod
    def _require_recipients(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("recipient_ids must not be empty")
        return value
