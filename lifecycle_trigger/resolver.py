"""
Audience resolver.

Maps the opaque responsible-party id stored on a registration to a
directory user. The id is checked locally first; only a usable id is
looked up, and it is looked up exactly once.
"""

import logging
from typing import Optional

from registry.directory import DirectoryLookup, DirectoryQuery, UserDirectory
from registry.errors import DirectoryError, InvalidPartyError, PartyNotFoundError
from registry.models import ResolvedIdentity

logger = logging.getLogger("audience_resolver")


def is_valid_party(party_id: Optional[str]) -> bool:
    """Check that a responsible-party id is present and not blank."""
    return party_id is not None and party_id.strip() != ""


class AudienceResolver:
    """
    Resolves responsible-party ids against a directory.

    Example:
        resolver = AudienceResolver(directory=UserDirectory())
        identity = resolver.resolve("U1")
        identity.username  # "jdoe"
    """

    def __init__(self, directory: Optional[DirectoryLookup] = None):
        """
        Initialize the resolver.

        Args:
            directory: Directory to query (defaults to the JSON-backed UserDirectory)
        """
        self.directory = directory or UserDirectory()

    def resolve(self, party_id: Optional[str]) -> ResolvedIdentity:
        """
        Look up the user behind a responsible-party id.

        Args:
            party_id: Opaque user id from the registration

        Returns:
            ResolvedIdentity with the directory username and the original id

        Raises:
            InvalidPartyError: If the id is missing or blank (no lookup made)
            PartyNotFoundError: If no user has this id
            DirectoryError: If the directory lookup itself fails
        """
        if not is_valid_party(party_id):
            raise InvalidPartyError("Responsible party id is null or empty", party_id=party_id)

        query = DirectoryQuery(field="id", value=party_id)
        try:
            matches = self.directory.query(query)
        except Exception as e:
            raise DirectoryError(f"Directory lookup failed: {e}", party_id=party_id) from e

        if not matches:
            raise PartyNotFoundError(f"User not found for ID: {party_id}", party_id=party_id)

        if len(matches) > 1:
            logger.warning(
                f"Directory returned {len(matches)} users for ID {party_id}, "
                f"using the first ({matches[0].username})"
            )

        return ResolvedIdentity(username=matches[0].username, party_id=party_id)
