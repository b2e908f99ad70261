"""Tests for database setup and error status codes."""

from unittest.mock import patch

from src import database
from src.exceptions import CannotDeleteSelfError, UserNeedsRolesError


def test_init_db_creates_tables_on_engine():
    with patch.object(database.Base.metadata, "create_all") as mock_create:
        database.init_db()

    mock_create.assert_called_once_with(bind=database.engine)
    assert {"users", "roles", "role_user"} <= set(database.Base.metadata.tables)


def test_engine_options_for_sqlite():
    assert database.engine_options("sqlite:///./test.db") == {
        "connect_args": {"check_same_thread": False}
    }


def test_rule_violations_answer_422():
    assert CannotDeleteSelfError.status_code == 422
    assert UserNeedsRolesError.status_code == 422
