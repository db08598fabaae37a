"""
Registration lifecycle trigger.

Entry point the host calls with a batch of registration changes. Each
change is handled on its own: filter the transition, check the responsible
party, dispatch the notification.

Design decisions:
- Synchronous, one change at a time, in batch order
- No state is shared between changes except read-only configuration
- A failure in one change is logged and recorded in the report; the
  remaining changes are still processed and execute() does not raise
- Changes for other objects or record events are skipped, mirroring how the
  trigger is registered on the host (AFTER_UPDATE on registration__rim)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from lifecycle_trigger.dispatcher import DispatchOutcome, DispatchStatus, NotificationDispatcher
from lifecycle_trigger.resolver import AudienceResolver, is_valid_party
from lifecycle_trigger.transition_filter import should_notify
from registry.directory import DirectoryLookup, UserDirectory
from registry.models import ChangeEvent
from registry.settings import TriggerSettings, get_settings
from registry.transport import InMemoryTransport, NotificationTransport

logger = logging.getLogger("lifecycle_trigger")


@dataclass
class BatchReport:
    """Per-event outcomes of one trigger invocation, in batch order."""
    outcomes: list[DispatchOutcome] = field(default_factory=list)

    def count(self, status: DispatchStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def sent(self) -> int:
        return self.count(DispatchStatus.SENT)

    @property
    def failed(self) -> int:
        return sum(
            1 for o in self.outcomes
            if o.status not in (DispatchStatus.SENT, DispatchStatus.SKIPPED)
        )

    def summary(self) -> dict[str, int]:
        """Status value -> number of events."""
        return dict(Counter(o.status.value for o in self.outcomes))


class RegistrationLifecycleTrigger:
    """
    Notifies the responsible person when a registration changes state.

    Example:
        trigger = RegistrationLifecycleTrigger(directory=directory, transport=transport)
        report = trigger.execute(events)
        report.sent  # number of notifications delivered
    """

    def __init__(
        self,
        settings: Optional[TriggerSettings] = None,
        directory: Optional[DirectoryLookup] = None,
        transport: Optional[NotificationTransport] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        """
        Initialize the trigger.

        Args:
            settings: Trigger settings (defaults to the cached environment settings)
            directory: User directory (defaults to one over settings.users_file)
            transport: Notification transport (defaults to a new InMemoryTransport)
            dispatcher: Fully built dispatcher; overrides directory and transport
        """
        self.settings = settings or get_settings()

        if dispatcher is None:
            directory = directory or UserDirectory(users_file=self.settings.users_file)
            dispatcher = NotificationDispatcher(
                resolver=AudienceResolver(directory=directory),
                transport=transport or InMemoryTransport(),
                labels=self.settings.state_labels,
                template=self.settings.template,
            )
        self.dispatcher = dispatcher

    def execute(self, events: Iterable[ChangeEvent]) -> BatchReport:
        """
        Process a batch of change events.

        Args:
            events: Any iterable of change events; consumed once

        Returns:
            BatchReport with one outcome per event
        """
        report = BatchReport()
        for event in events:
            try:
                outcome = self.process(event)
            except Exception as e:
                name = event.after.name
                logger.error(f"Unexpected error processing {event} (registration: {name}): {e}")
                outcome = DispatchOutcome(
                    status=DispatchStatus.FAILED,
                    entity_name=name,
                    party_id=event.after.responsible_party,
                    error=str(e),
                )
            report.outcomes.append(outcome)

        logger.info(f"Processed {len(report.outcomes)} registration changes: {report.summary()}")
        return report

    def process(self, event: ChangeEvent) -> DispatchOutcome:
        """Handle a single change event."""
        before, after = event.before, event.after

        if (event.object_name != self.settings.object_name
                or event.event_type != self.settings.event_type):
            logger.debug(f"Ignoring {event}: trigger is registered for "
                         f"{self.settings.event_type} on {self.settings.object_name}")
            return DispatchOutcome(status=DispatchStatus.SKIPPED, entity_name=after.name)

        if not should_notify(before, after):
            return DispatchOutcome(status=DispatchStatus.SKIPPED, entity_name=after.name)

        party_id = after.responsible_party
        name = after.name

        if not is_valid_party(party_id):
            logger.error(f"Responsible person is null or empty for registration: {name}")
            return DispatchOutcome(
                status=DispatchStatus.INVALID_PARTY,
                entity_name=name,
                party_id=party_id,
                error="Responsible party id is null or empty",
            )

        return self.dispatcher.dispatch(party_id, before.state, after.state, name)
