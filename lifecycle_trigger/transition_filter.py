"""Decides whether a registration change is worth a notification."""

from registry.models import RegistrationSnapshot


def has_state_changed(old_state, new_state) -> bool:
    """
    True when both states are known and differ.

    A missing state on either side means "unknown", never a change.
    """
    return old_state is not None and new_state is not None and old_state != new_state


def should_notify(before: RegistrationSnapshot, after: RegistrationSnapshot) -> bool:
    """Check whether the lifecycle state moved between two snapshots."""
    return has_state_changed(before.state, after.state)
