"""
JSON-backed user directory.

Stands in for the host's identity service (the user__sys object). The
resolver only needs a query-style read: "give me the users whose <field>
equals <value>".

Design decisions:
- Queries are structured objects (collection, field, value), never strings;
  the value is compared as data and cannot change the shape of the query
- Queryable fields are an explicit allow-list
- Users are loaded lazily from a JSON fixture, in file order, so results
  come back in a stable order
- lookup_count is tracked so callers and tests can verify how many
  lookups were made
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from registry.models import DirectoryUser

logger = logging.getLogger("directory")


USERS_COLLECTION = "users"
QUERYABLE_FIELDS = frozenset({"id", "username", "email"})


class DirectoryQuery(BaseModel):
    """
    An equality filter against a directory collection.

    Equivalent to `SELECT ... FROM <collection> WHERE <field> = :value`
    with `value` bound as a parameter.
    """
    collection: str = Field(default=USERS_COLLECTION)
    field: str = Field(..., description="Field to match on")
    value: str = Field(..., description="Value bound for exact comparison")

    model_config = ConfigDict(frozen=True)

    @field_validator("field")
    @classmethod
    def _known_field(cls, value: str) -> str:
        if value not in QUERYABLE_FIELDS:
            raise ValueError(f"Field is not queryable: {value}")
        return value


class DirectoryLookup(Protocol):
    """Read interface the resolver needs from an identity directory."""

    def query(self, query: DirectoryQuery) -> list[DirectoryUser]:
        ...


class UserDirectory:
    """
    In-memory directory loaded from a JSON fixture.

    Example:
        directory = UserDirectory(users_file=Path("data/users.json"))
        users = directory.query(DirectoryQuery(field="id", value="U1"))
    """

    def __init__(
        self,
        users_file: Optional[Path] = None,
        users: Optional[list[DirectoryUser]] = None,
    ):
        """
        Initialize the directory.

        Args:
            users_file: JSON file holding a list of user records.
                        Defaults to data/users.json at the project root.
            users: Preloaded users; when given, the file is not read.
        """
        if users_file is None:
            users_file = Path(__file__).parent.parent / "data" / "users.json"
        self.users_file = Path(users_file)

        self._users: Optional[list[DirectoryUser]] = list(users) if users is not None else None
        self.lookup_count = 0

    def _load_json(self) -> list[dict]:
        """Load the users fixture file."""
        if not self.users_file.exists():
            logger.warning(f"Users file not found: {self.users_file}")
            return []
        with open(self.users_file, "r") as f:
            return json.load(f)

    def _ensure_users_loaded(self):
        """Lazy load users from JSON."""
        if self._users is None:
            self._users = [DirectoryUser(**u) for u in self._load_json()]
            logger.debug(f"Loaded {len(self._users)} users from {self.users_file}")

    def query(self, query: DirectoryQuery) -> list[DirectoryUser]:
        """
        Run an equality query against the directory.

        Args:
            query: Collection, field and bound value to match

        Returns:
            Matching users in directory order (possibly empty)

        Raises:
            ValueError: If the collection is unknown
        """
        if query.collection != USERS_COLLECTION:
            raise ValueError(f"Unknown collection: {query.collection}")

        self._ensure_users_loaded()
        self.lookup_count += 1

        return [
            user for user in self._users
            if getattr(user, query.field) == query.value
        ]

    def get_users(self) -> list[DirectoryUser]:
        """Get all users."""
        self._ensure_users_loaded()
        return list(self._users)

    def add_user(self, user: DirectoryUser) -> None:
        """Add a user (in-memory only)."""
        self._ensure_users_loaded()
        self._users.append(user)
