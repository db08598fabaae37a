"""
Mock notification transport.

Simulates the host's notification service (email + in-app) by logging the
output and recording what was submitted. In a real deployment this would
be the platform's NotificationService, or a provider like SendGrid or SES.

Design decisions:
- All sends are logged for visibility
- Submitted payloads are recorded for test assertions
- Failures can be simulated (randomly, or for specific recipients) and are
  reported by raising TransportError, the way a remote call fails
"""

import logging
import random
from typing import Iterable, Optional, Protocol

from registry.errors import TransportError
from registry.models import NotificationPayload

logger = logging.getLogger("transport")


class NotificationTransport(Protocol):
    """Submit interface the dispatcher needs from a notification service."""

    def send(self, payload: NotificationPayload) -> None:
        ...


class InMemoryTransport:
    """
    Transport that records payloads instead of delivering them.

    Can simulate failures for testing error handling.
    """

    def __init__(self, fail_rate: float = 0.0, fail_for: Optional[Iterable[str]] = None):
        """
        Initialize the transport.

        Args:
            fail_rate: Probability of send failure (0.0 to 1.0), for testing.
            fail_for: Recipient ids whose sends always fail.
        """
        self.fail_rate = fail_rate
        self.fail_for = set(fail_for or ())
        self.sent_payloads: list[NotificationPayload] = []
        self.send_calls = 0

    def send(self, payload: NotificationPayload) -> None:
        """
        Submit a notification (mock implementation).

        Raises:
            TransportError: If the send is simulated to fail
        """
        self.send_calls += 1

        failing = self.fail_for & payload.recipient_ids
        if failing:
            raise TransportError(f"Delivery rejected for recipients: {', '.join(sorted(failing))}")
        if random.random() < self.fail_rate:
            raise TransportError("Simulated delivery failure")

        self.sent_payloads.append(payload)
        logger.info(
            f"[NOTIFY] To: {', '.join(sorted(payload.recipient_ids))} | Subject: {payload.subject}"
        )
        logger.debug(f"[NOTIFY BODY] {payload.body}")

    def get_sent_count(self) -> int:
        """Get the number of payloads delivered (for testing)."""
        return len(self.sent_payloads)

    def find_payload_to(self, recipient_id: str) -> Optional[NotificationPayload]:
        """Find a payload sent to a specific recipient."""
        for payload in self.sent_payloads:
            if recipient_id in payload.recipient_ids:
                return payload
        return None

    def clear_history(self):
        """Clear sent payload history (useful between tests)."""
        self.sent_payloads.clear()
        self.send_calls = 0
