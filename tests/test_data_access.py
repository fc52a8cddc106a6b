"""
Tests for the user-scoped data access layer.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from jobtrack.core.exceptions import NotAuthenticatedError, PersistenceError, RecordNotFoundError
from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.sticker import Sticker
from jobtrack.services.applications import get_all_applications
from jobtrack.services.job_listings import create_job_listing
from jobtrack.services.routines import toggle_self_check


def test_missing_user_fails_before_any_query():
    db = MagicMock()
    with pytest.raises(NotAuthenticatedError):
        UserScopedTable(db, Sticker, None)
    with pytest.raises(NotAuthenticatedError):
        UserScopedTable(db, Sticker, SimpleNamespace(id=None))
    db.query.assert_not_called()


@pytest.mark.parametrize("call", [
    lambda db: get_all_applications(db, None),
    lambda db: toggle_self_check(db, None, "2026-03-02", "wake_up"),
    lambda db: create_job_listing(db, None, "A", "x"),
])
def test_services_require_user(call):
    db = MagicMock()
    with pytest.raises(NotAuthenticatedError):
        call(db)
    db.query.assert_not_called()
    db.add.assert_not_called()


def test_insert_sets_owner(db, test_user):
    sticker = UserScopedTable(db, Sticker, test_user).insert({"text": "memo", "is_completed": False})
    assert sticker.user_id == test_user.id


def test_update_and_delete_are_scoped(db, test_user, other_user):
    sticker = UserScopedTable(db, Sticker, other_user).insert({"text": "theirs", "is_completed": False})
    mine = UserScopedTable(db, Sticker, test_user)

    with pytest.raises(RecordNotFoundError):
        mine.update(sticker.id, {"text": "hijacked"})
    with pytest.raises(RecordNotFoundError):
        mine.delete(sticker.id)
    assert mine.select_all() == []


def test_count_and_find_one(db, test_user):
    table = UserScopedTable(db, Sticker, test_user)
    table.insert({"text": "a", "is_completed": True})
    table.insert({"text": "b", "is_completed": False})
    assert table.count() == 2
    assert table.count(where=[Sticker.is_completed.is_(True)]) == 1
    assert table.find_one(text="b").is_completed is False
    assert table.find_one(text="zzz") is None


def test_backend_failure_becomes_persistence_error(test_user):
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT 1", {}, Exception("database is locked"))

    with pytest.raises(PersistenceError) as exc_info:
        UserScopedTable(db, Sticker, test_user).select_all()

    assert "database is locked" in exc_info.value.message
    assert exc_info.value.status_code == 500
    db.rollback.assert_called_once()


def test_flushed_writes_commit_together(db, test_user):
    table = UserScopedTable(db, Sticker, test_user)
    keep = table.insert({"text": "keep", "is_completed": False})

    added = table.insert({"text": "added", "is_completed": False}, commit=False)
    table.delete(keep.id, commit=False)
    assert added.id is not None

    db.rollback()
    assert [s.text for s in table.select_all()] == ["keep"]

    added = table.insert({"text": "added", "is_completed": False}, commit=False)
    table.delete(keep.id, commit=False)
    table.commit(added)
    assert [s.text for s in table.select_all()] == ["added"]
