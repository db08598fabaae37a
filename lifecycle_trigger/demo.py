"""
Demonstration script for the registration lifecycle trigger.

Runs a small batch through the trigger against the fixture directory so the
log output shows each branch: a delivered notification, a missing
responsible person, an unknown user, and a change that is not a transition.
"""

from lifecycle_trigger.events import registration_changed
from lifecycle_trigger.trigger import RegistrationLifecycleTrigger
from registry.directory import UserDirectory
from registry.settings import configure_logging, get_settings
from registry.transport import InMemoryTransport


def run_lifecycle_demo():
    """Process a four-change batch and print what was sent."""
    settings = get_settings()
    configure_logging(settings.log_level)

    print("\n" + "=" * 70)
    print("DEMO: Registration Lifecycle Change Notification")
    print("=" * 70 + "\n")

    transport = InMemoryTransport()
    trigger = RegistrationLifecycleTrigger(
        settings=settings,
        directory=UserDirectory(users_file=settings.users_file),
        transport=transport,
    )

    events = [
        registration_changed(
            {"state__v": "planned_state1__c", "responsible_person__c": "U1", "name__v": "REG-100"},
            {"state__v": "approved_state1__c", "responsible_person__c": "U1", "name__v": "REG-100"},
        ),
        registration_changed(
            {"state__v": "approved_state1__c", "responsible_person__c": "", "name__v": "REG-101"},
            {"state__v": "suspended_state__c", "responsible_person__c": "", "name__v": "REG-101"},
        ),
        registration_changed(
            {"state__v": "approved_state1__c", "responsible_person__c": "U404", "name__v": "REG-102"},
            {"state__v": "expired_state__c", "responsible_person__c": "U404", "name__v": "REG-102"},
        ),
        registration_changed(
            {"state__v": "closed_state__c", "responsible_person__c": "U2", "name__v": "REG-103"},
            {"state__v": "closed_state__c", "responsible_person__c": "U2", "name__v": "REG-103"},
        ),
    ]

    print("-" * 70)
    print(f"ACTION: Executing trigger with {len(events)} registration changes")
    print("-" * 70 + "\n")

    report = trigger.execute(events)

    print("\nOutcomes:")
    for outcome in report.outcomes:
        print(f"  {outcome}")

    print("\nNotifications sent:")
    for payload in transport.sent_payloads:
        print(f"  To {', '.join(sorted(payload.recipient_ids))}: {payload.body}")

    return report
