"""
Shared pytest fixtures for the registration lifecycle notifier tests.

These fixtures provide consistent test data and fresh collaborators per test.
"""

import pytest
from pathlib import Path

from lifecycle_trigger.dispatcher import NotificationDispatcher
from lifecycle_trigger.resolver import AudienceResolver
from lifecycle_trigger.trigger import RegistrationLifecycleTrigger
from registry.directory import UserDirectory
from registry.models import DirectoryUser
from registry.settings import TriggerSettings
from registry.transport import InMemoryTransport


@pytest.fixture
def data_dir() -> Path:
    """Path to the fixture data directory."""
    return Path(__file__).parent.parent / "data"


@pytest.fixture
def users_file(data_dir: Path) -> Path:
    return data_dir / "users.json"


@pytest.fixture
def settings(users_file: Path) -> TriggerSettings:
    """Default settings, ignoring any .env file in the working directory."""
    return TriggerSettings(_env_file=None, users_file=users_file)


@pytest.fixture
def directory() -> UserDirectory:
    """
    Fresh in-memory directory for each test.

    U1 resolves to jdoe, U2 to asmith. Nothing else is known.
    """
    return UserDirectory(users=[
        DirectoryUser(id="U1", username="jdoe"),
        DirectoryUser(id="U2", username="asmith"),
    ])


@pytest.fixture
def transport() -> InMemoryTransport:
    """Fresh transport that never fails."""
    return InMemoryTransport(fail_rate=0.0)


@pytest.fixture
def resolver(directory: UserDirectory) -> AudienceResolver:
    return AudienceResolver(directory=directory)


@pytest.fixture
def dispatcher(resolver: AudienceResolver, transport: InMemoryTransport) -> NotificationDispatcher:
    return NotificationDispatcher(resolver=resolver, transport=transport)


@pytest.fixture
def trigger(
    settings: TriggerSettings,
    directory: UserDirectory,
    transport: InMemoryTransport,
) -> RegistrationLifecycleTrigger:
    """Trigger wired to the in-memory directory and transport."""
    return RegistrationLifecycleTrigger(
        settings=settings,
        directory=directory,
        transport=transport,
    )


# =============================================================================
# Host field fixtures
# =============================================================================

@pytest.fixture
def planned_reg_100() -> dict:
    """REG-100 in the Planned state, owned by U1."""
    return {"state__v": "planned_state1__c", "responsible_person__c": "U1", "name__v": "REG-100"}


@pytest.fixture
def approved_reg_100() -> dict:
    """REG-100 after approval, still owned by U1."""
    return {"state__v": "approved_state1__c", "responsible_person__c": "U1", "name__v": "REG-100"}
