"""
Errors raised while processing a registration change.

Every error here is scoped to a single change event. The trigger converts
them into per-event outcomes so one failure never stops the rest of a batch.
"""


class LifecycleNotificationError(Exception):
    """Base class for per-event notification failures."""

    kind = "Error"


class ResolutionError(LifecycleNotificationError):
    """The responsible party could not be resolved to a directory user."""

    kind = "ResolutionError"

    def __init__(self, message: str, party_id=None):
        super().__init__(message)
        self.party_id = party_id


class InvalidPartyError(ResolutionError):
    """Responsible party id is missing or blank; no lookup was attempted."""

    kind = "InvalidParty"


class PartyNotFoundError(ResolutionError):
    """The directory has no user with the given id."""

    kind = "NotFound"


class DirectoryError(ResolutionError):
    """The directory lookup itself failed (unreachable, bad response)."""

    kind = "DirectoryError"


class TransportError(LifecycleNotificationError):
    """The notification transport rejected or failed to deliver a payload."""

    kind = "TransportError"
