"""Owner-scoped record store over a SQLAlchemy session.

Every read and write is filtered by ``user_id``: a record belonging to a
different user behaves exactly like a missing one.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fittrack.core.clock import to_local_naive
from fittrack.core.exceptions import DuplicateKeyError, NotFoundError, StoreUnavailableError
from fittrack.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 100


@contextmanager
def store_errors(db: Session, resource: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into the store's error taxonomy."""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        raise DuplicateKeyError(resource, message=f"{resource} already exists") from e
    except (DBAPIError, SQLAlchemyError) as e:
        db.rollback()
        logger.error("store_unavailable", resource=resource, error=str(e))
        raise StoreUnavailableError() from e


class RecordStore:
    """CRUD and range queries for one record model."""

    def __init__(self, db: Session, model, resource: Optional[str] = None):
        self.db = db
        self.model = model
        self.resource = resource or model.__name__

    def _owned(self, owner_id: int):
        return self.db.query(self.model).filter(self.model.user_id == owner_id)

    def insert(self, owner_id: int, **fields: Any):
        with store_errors(self.db, self.resource):
            record = self.model(user_id=owner_id, **fields)
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def get_owned(self, owner_id: int, record_id: int):
        with store_errors(self.db, self.resource):
            record = self._owned(owner_id).filter(self.model.id == record_id).first()
        if record is None:
            raise NotFoundError(self.resource, record_id)
        return record

    def update_owned(self, owner_id: int, record_id: int, changes: dict[str, Any]):
        record = self.get_owned(owner_id, record_id)
        with store_errors(self.db, self.resource):
            for key, value in changes.items():
                setattr(record, key, value)
            self.db.commit()
            self.db.refresh(record)
        return record

    def delete_owned(self, owner_id: int, record_id: int) -> None:
        record = self.get_owned(owner_id, record_id)
        with store_errors(self.db, self.resource):
            self.db.delete(record)
            self.db.commit()

    def find(
        self,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        filters: Optional[dict[str, Any]] = None,
        search: Optional[tuple[str, str]] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list:
        """Newest-first listing with optional date range, equality filters
        and a case-insensitive literal substring search on one column."""
        with store_errors(self.db, self.resource):
            query = self._owned(owner_id)
            if start is not None:
                query = query.filter(self.model.date >= to_local_naive(start))
            if end is not None:
                query = query.filter(self.model.date <= to_local_naive(end))
            for column, value in (filters or {}).items():
                query = query.filter(getattr(self.model, column) == value)
            if search:
                column, term = search
                query = query.filter(getattr(self.model, column).icontains(term, autoescape=True))
            return query.order_by(self.model.date.desc()).limit(limit).all()

    def find_since(self, owner_id: int, since: datetime) -> list:
        """All records dated at or after ``since``, oldest first."""
        with store_errors(self.db, self.resource):
            return (
                self._owned(owner_id)
                .filter(self.model.date >= since)
                .order_by(self.model.date.asc(), self.model.id.asc())
                .all()
            )

    def find_in_day(self, owner_id: int, day_start: datetime, day_end: datetime):
        """The first record with ``day_start <= date < day_end``."""
        with store_errors(self.db, self.resource):
            return (
                self._owned(owner_id)
                .filter(self.model.date >= day_start, self.model.date < day_end)
                .first()
            )
