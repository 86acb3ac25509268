"""
Record stores behind the ledgers.

Every ledger talks to a RecordStore, never to the database directly, so the
same join/room/deposit logic runs on process memory or on the relational
backend. Records are the dataclasses from ``lobby.records``; each declares its
key attribute as ``KEY``.
"""
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import asdict, fields, replace
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .models import db

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The persistence backend failed; carries the backend's message."""


class DuplicateRecordError(StoreError):
    """An insert collided with an existing key or unique constraint."""


class RecordStore(ABC):
    """Get/List/Insert/Update/Delete over one record type."""

    def __init__(self, record_cls):
        self.record_cls = record_cls
        self.key = record_cls.KEY

    @abstractmethod
    def get(self, key: str):
        """Return the record with this key, or None."""

    @abstractmethod
    def list(self, order_by: str = None, descending: bool = False, **filters) -> List:
        """Return records whose attributes equal every filter value."""

    @abstractmethod
    def count(self, **filters) -> int:
        pass

    @abstractmethod
    def insert(self, record):
        """Add a new record. Raises DuplicateRecordError on collision."""

    @abstractmethod
    def update(self, key: str, **changes):
        """Apply changes to one record; returns the updated record or None."""

    @abstractmethod
    def update_where(self, changes: dict, **filters) -> int:
        """Apply changes to every matching record; returns how many matched."""

    @abstractmethod
    def upsert(self, record):
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a record; returns whether anything was removed."""


class MemoryStore(RecordStore):
    """
    Process-memory store.
    Keeps records in insertion order and hands out copies so callers
    cannot mutate stored state behind the lock.
    """

    def __init__(self, record_cls, unique_together: Tuple[str, ...] = ()):
        super().__init__(record_cls)
        self.unique_together = unique_together
        self._records: Dict[str, object] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _matches(record, filters: dict) -> bool:
        return all(getattr(record, name) == value for name, value in filters.items())

    def get(self, key: str):
        with self._lock:
            record = self._records.get(key)
            return replace(record) if record else None

    def list(self, order_by: str = None, descending: bool = False, **filters) -> List:
        with self._lock:
            records = [replace(r) for r in self._records.values() if self._matches(r, filters)]

        if order_by:
            records.sort(key=lambda r: getattr(r, order_by), reverse=descending)
        return records

    def count(self, **filters) -> int:
        with self._lock:
            return sum(1 for r in self._records.values() if self._matches(r, filters))

    def insert(self, record):
        key = getattr(record, self.key)
        with self._lock:
            if key in self._records:
                raise DuplicateRecordError(f"{self.record_cls.__name__} {key} already exists")

            if self.unique_together:
                unique = {name: getattr(record, name) for name in self.unique_together}
                if any(self._matches(r, unique) for r in self._records.values()):
                    raise DuplicateRecordError(
                        f"{self.record_cls.__name__} with {unique} already exists"
                    )

            self._records[key] = replace(record)
        return replace(record)

    def update(self, key: str, **changes):
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            updated = replace(record, **changes)
            self._records[key] = updated
            return replace(updated)

    def update_where(self, changes: dict, **filters) -> int:
        with self._lock:
            keys = [k for k, r in self._records.items() if self._matches(r, filters)]
            for k in keys:
                self._records[k] = replace(self._records[k], **changes)
            return len(keys)

    def upsert(self, record):
        with self._lock:
            self._records[getattr(record, self.key)] = replace(record)
        return replace(record)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None


class SqlStore(RecordStore):
    """Relational store on the shared Flask-SQLAlchemy session."""

    def __init__(self, model, record_cls):
        super().__init__(record_cls)
        self.model = model

    @contextmanager
    def _backend(self, action: str):
        try:
            yield
        except IntegrityError as e:
            db.session.rollback()
            raise DuplicateRecordError(str(e.orig)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            message = str(getattr(e, 'orig', None) or e)
            logger.error(f"{action} on {self.model.__tablename__} failed: {message}")
            raise StoreError(message) from e

    def _to_record(self, row):
        return self.record_cls(**{f.name: getattr(row, f.name) for f in fields(self.record_cls)})

    def _by_key(self, key: str):
        return self.model.query.filter_by(**{self.key: key})

    def get(self, key: str):
        with self._backend('get'):
            row = self._by_key(key).first()
            return self._to_record(row) if row else None

    def list(self, order_by: str = None, descending: bool = False, **filters) -> List:
        with self._backend('list'):
            query = self.model.query.filter_by(**filters)
            if order_by:
                column = getattr(self.model, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            return [self._to_record(row) for row in query.all()]

    def count(self, **filters) -> int:
        with self._backend('count'):
            return self.model.query.filter_by(**filters).count()

    def insert(self, record):
        with self._backend('insert'):
            db.session.add(self.model(**asdict(record)))
            db.session.commit()
        return record

    def update(self, key: str, **changes):
        with self._backend('update'):
            row = self._by_key(key).first()
            if row is None:
                return None
            for name, value in changes.items():
                setattr(row, name, value)
            db.session.commit()
            return self._to_record(row)

    def update_where(self, changes: dict, **filters) -> int:
        with self._backend('update_where'):
            matched = self.model.query.filter_by(**filters).update(
                changes, synchronize_session=False
            )
            db.session.commit()
            return matched

    def upsert(self, record):
        with self._backend('upsert'):
            db.session.merge(self.model(**asdict(record)))
            db.session.commit()
        return record

    def delete(self, key: str) -> bool:
        with self._backend('delete'):
            removed = self._by_key(key).delete()
            db.session.commit()
            return removed > 0
