"""
Notification dispatcher.

Renders the lifecycle change message and delivers it to the registration's
responsible party.

Design decisions:
- Every call returns a DispatchOutcome instead of raising, so a failed
  lookup or send only affects its own change event
- Exactly one error is logged per failed dispatch
- Notifications are addressed to the original party id; the resolved
  username is only logged
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional

from lifecycle_trigger.resolver import AudienceResolver
from registry.errors import (
    DirectoryError,
    InvalidPartyError,
    PartyNotFoundError,
)
from registry.labels import STATE_LABELS, MessageTemplate, render_lifecycle_message
from registry.models import NotificationPayload
from registry.transport import InMemoryTransport, NotificationTransport

logger = logging.getLogger("notification_dispatcher")


class DispatchStatus(str, Enum):
    """What happened to one change event."""
    SENT = "sent"
    SKIPPED = "skipped"                  # Not a qualifying transition
    INVALID_PARTY = "invalid_party"      # Responsible party missing or blank
    NOT_FOUND = "not_found"              # Party id unknown to the directory
    LOOKUP_ERROR = "lookup_error"        # Directory call failed
    TRANSPORT_ERROR = "transport_error"  # Send failed
    FAILED = "failed"                    # Unexpected error while processing


@dataclass
class DispatchOutcome:
    """
    Result of processing one change event.

    Captures success/failure and what was sent, for the caller and for tests.
    """
    status: DispatchStatus
    entity_name: Optional[str] = None
    party_id: Optional[str] = None
    username: Optional[str] = None
    payload: Optional[NotificationPayload] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)

    @property
    def success(self) -> bool:
        return self.status == DispatchStatus.SENT

    def __str__(self) -> str:
        mark = "✓" if self.success else "✗"
        return f"{mark} {self.status.value} registration={self.entity_name} party={self.party_id}"


class NotificationDispatcher:
    """
    Resolves the audience, renders the message and submits it.

    Example:
        dispatcher = NotificationDispatcher(resolver=resolver, transport=transport)
        outcome = dispatcher.dispatch("U1", "planned_state1__c", "closed_state__c", "REG-100")
    """

    def __init__(
        self,
        resolver: Optional[AudienceResolver] = None,
        transport: Optional[NotificationTransport] = None,
        labels: Mapping[str, str] = STATE_LABELS,
        template: Optional[MessageTemplate] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            resolver: Audience resolver (defaults to one over the default directory)
            transport: Notification transport (defaults to a new InMemoryTransport)
            labels: State code -> label table
            template: Subject/body template (defaults to the standard message)
        """
        self.resolver = resolver or AudienceResolver()
        self.transport = transport or InMemoryTransport()
        self.labels = labels
        self.template = template or MessageTemplate()

    def dispatch(
        self,
        party_id: Optional[str],
        old_state: str,
        new_state: str,
        entity_name: Optional[str],
    ) -> DispatchOutcome:
        """
        Notify the responsible party about a lifecycle change.

        Args:
            party_id: Opaque user id of the responsible party
            old_state: State code before the update
            new_state: State code after the update
            entity_name: Registration name for the message

        Returns:
            DispatchOutcome; never raises for lookup or delivery failures
        """
        # Step 1: Render the message from translated labels
        subject, message = render_lifecycle_message(
            old_state,
            new_state,
            entity_name,
            labels=self.labels,
            template=self.template,
        )

        # Step 2: Resolve the audience
        try:
            identity = self.resolver.resolve(party_id)
        except InvalidPartyError as e:
            logger.error(f"Responsible person is null or empty for registration: {entity_name}")
            return DispatchOutcome(
                status=DispatchStatus.INVALID_PARTY,
                entity_name=entity_name,
                party_id=party_id,
                error=str(e),
            )
        except PartyNotFoundError as e:
            logger.error(f"User not found for ID: {party_id}")
            return DispatchOutcome(
                status=DispatchStatus.NOT_FOUND,
                entity_name=entity_name,
                party_id=party_id,
                error=str(e),
            )
        except DirectoryError as e:
            logger.error(f"Failed to look up responsible person for registration {entity_name}: {e}")
            return DispatchOutcome(
                status=DispatchStatus.LOOKUP_ERROR,
                entity_name=entity_name,
                party_id=party_id,
                error=str(e),
            )

        logger.info(f"Responsible person username: {identity.username}")

        # Step 3: Build the payload, addressed by id
        payload = NotificationPayload(
            subject=subject,
            body=message,
            in_app_text=message,
            recipient_ids=frozenset({identity.party_id}),
        )

        # Step 4: Submit
        try:
            self.transport.send(payload)
        except Exception as e:
            logger.error(f"Failed to send notification: {e}")
            return DispatchOutcome(
                status=DispatchStatus.TRANSPORT_ERROR,
                entity_name=entity_name,
                party_id=party_id,
                username=identity.username,
                payload=payload,
                error=str(e),
            )

        logger.info(f"Notification sent to user ID {party_id} for registration: {entity_name}")
        return DispatchOutcome(
            status=DispatchStatus.SENT,
            entity_name=entity_name,
            party_id=party_id,
            username=identity.username,
            payload=payload,
        )
