"""
User-scoped data access over the ORM models.

Every service goes through UserScopedTable, so each query is filtered by the
owner and every backend failure is rolled back and reported as a
PersistenceError carrying the database message.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobtrack.core.exceptions import (
    NotAuthenticatedError,
    PersistenceError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def _error_message(error: SQLAlchemyError) -> str:
    """Backend message without SQLAlchemy's statement dump."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class UserScopedTable:
    """
    CRUD over one table, restricted to the rows of one user.

    Raises NotAuthenticatedError on construction when no user is resolved,
    before any statement reaches the database.
    """

    def __init__(self, db: Session, model, user):
        if user is None or getattr(user, "id", None) is None:
            raise NotAuthenticatedError()
        self.db = db
        self.model = model
        self.user_id = user.id

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _query(self):
        return self.db.query(self.model).filter(self.model.user_id == self.user_id)

    def _fail(self, action: str, error: SQLAlchemyError):
        self.db.rollback()
        message = _error_message(error)
        logger.error(f"Failed to {action} {self.table_name}: {message}", exc_info=True)
        raise PersistenceError(f"Failed to {action} {self.table_name}: {message}") from error

    def select_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        where: Iterable = (),
        order_by: Sequence = (),
    ) -> List[Any]:
        """Rows matching equality `filters` and extra `where` clauses."""
        try:
            query = self._query()
            for field, value in (filters or {}).items():
                query = query.filter(getattr(self.model, field) == value)
            for clause in where:
                query = query.filter(clause)
            if order_by:
                query = query.order_by(*order_by)
            return query.all()
        except SQLAlchemyError as e:
            self._fail("fetch", e)

    def get(self, record_id: int):
        try:
            return self._query().filter(self.model.id == record_id).first()
        except SQLAlchemyError as e:
            self._fail("fetch", e)

    def get_or_raise(self, record_id: int):
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.table_name} record {record_id} not found")
        return record

    def find_one(self, **filters):
        try:
            query = self._query()
            for field, value in filters.items():
                query = query.filter(getattr(self.model, field) == value)
            return query.first()
        except SQLAlchemyError as e:
            self._fail("fetch", e)

    def count(self, where: Iterable = ()) -> int:
        try:
            query = self._query()
            for clause in where:
                query = query.filter(clause)
            return query.count()
        except SQLAlchemyError as e:
            self._fail("count", e)

    def insert(self, values: Dict[str, Any], commit: bool = True):
        """Insert a row; with commit=False it is only flushed into the open transaction."""
        record = self.model(user_id=self.user_id, **values)
        try:
            self.db.add(record)
            if commit:
                self.db.commit()
                self.db.refresh(record)
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            self._fail("create", e)
        logger.info(f"Created {self.table_name}: id={record.id}, user_id={self.user_id}")
        return record

    def update(self, record_id: int, values: Dict[str, Any]):
        """Replace only the fields present in `values`."""
        record = self.get_or_raise(record_id)
        try:
            for field, value in values.items():
                setattr(record, field, value)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail("update", e)
        logger.info(f"Updated {self.table_name}: id={record_id}, fields={sorted(values)}")
        return record

    def delete(self, record_id: int, commit: bool = True) -> None:
        record = self.get_or_raise(record_id)
        try:
            self.db.delete(record)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            self._fail("delete", e)
        logger.info(f"Deleted {self.table_name}: id={record_id}, user_id={self.user_id}")

    def commit(self, *records) -> None:
        """Commit flushed writes as one transaction and reload `records`."""
        try:
            self.db.commit()
            for record in records:
                self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail("commit", e)

    def upsert(self, values: Dict[str, Any], conflict_keys: Sequence[str]):
        """Insert, or replace the row sharing the values of `conflict_keys`."""
        existing = self.find_one(**{key: values[key] for key in conflict_keys})
        if existing is None:
            return self.insert(values)
        return self.update(existing.id, values)
