"""
Tests for the JSON-backed user directory.
"""

import json

import pytest
from pydantic import ValidationError

from registry.directory import DirectoryQuery, UserDirectory
from registry.models import DirectoryUser


class TestDirectoryQuery:
    """Tests for query validation."""

    def test_defaults_to_users_collection(self):
        query = DirectoryQuery(field="id", value="U1")

        assert query.collection == "users"

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError, match="not queryable"):
            DirectoryQuery(field="password", value="x")


class TestUserDirectory:
    """Tests for UserDirectory lookups."""

    def test_query_by_id(self, directory: UserDirectory):
        users = directory.query(DirectoryQuery(field="id", value="U1"))

        assert [u.username for u in users] == ["jdoe"]

    def test_query_no_match(self, directory: UserDirectory):
        assert directory.query(DirectoryQuery(field="id", value="U404")) == []

    def test_value_is_compared_as_data(self, directory: UserDirectory):
        """Test that query syntax inside the value matches nothing."""
        users = directory.query(DirectoryQuery(field="id", value="U1' OR '1'='1"))

        assert users == []

    def test_exact_match_only(self, directory: UserDirectory):
        assert directory.query(DirectoryQuery(field="id", value="U")) == []
        assert directory.query(DirectoryQuery(field="id", value="u1")) == []

    def test_counts_lookups(self, directory: UserDirectory):
        directory.query(DirectoryQuery(field="id", value="U1"))
        directory.query(DirectoryQuery(field="id", value="U2"))

        assert directory.lookup_count == 2

    def test_unknown_collection_raises(self, directory: UserDirectory):
        with pytest.raises(ValueError, match="Unknown collection"):
            directory.query(DirectoryQuery(collection="groups", field="id", value="G1"))

    def test_results_in_directory_order(self, directory: UserDirectory):
        directory.add_user(DirectoryUser(id="U1", username="jdoe2"))

        users = directory.query(DirectoryQuery(field="id", value="U1"))

        assert [u.username for u in users] == ["jdoe", "jdoe2"]


class TestUserDirectoryFile:
    """Tests for loading users from JSON."""

    def test_loads_fixture_file(self, users_file):
        directory = UserDirectory(users_file=users_file)

        users = directory.query(DirectoryQuery(field="id", value="U1"))

        assert users[0].username == "jdoe"
        assert len(directory.get_users()) >= 2

    def test_loads_lazily(self, tmp_path):
        path = tmp_path / "users.json"
        directory = UserDirectory(users_file=path)
        path.write_text(json.dumps([{"id": "X1", "username": "late"}]))

        assert directory.query(DirectoryQuery(field="id", value="X1"))[0].username == "late"

    def test_missing_file_is_empty(self, tmp_path):
        directory = UserDirectory(users_file=tmp_path / "missing.json")

        assert directory.get_users() == []
