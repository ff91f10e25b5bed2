"""
DebtStore, the one owner of the debts table.

The store is built once at process start, opened, handed to the
transport layer, and closed at process stop. Every public method
is a single unit of work: the store lock is held, a session is
opened, the DebtService does the work, and the session is either
committed or rolled back before the lock is released. Callers get
DebtRecord copies, never live ORM rows.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from debt_ledger.errors import DebtError, StorageError
from debt_ledger.models.base import (
    Base,
    create_db_engine,
    make_session_factory,
    utcnow,
)
from debt_ledger.schemas.debt import DebtPayload, DebtRecord
from debt_ledger.services.debt_service import DebtService

logger = logging.getLogger(__name__)


class DebtStore:

    def __init__(
        self,
        database_url: str,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.database_url = database_url
        self.clock = clock
        self._lock = threading.RLock()
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    # --- Lifecycle ---

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "DebtStore":
        """
        Connect to the database and create the schema if missing.

        Opening an already open store does nothing.
        """
        with self._lock:
            if self._engine is not None:
                return self

            engine = create_db_engine(self.database_url)
            try:
                Base.metadata.create_all(bind=engine)
            except SQLAlchemyError as e:
                engine.dispose()
                logger.exception("Could not prepare debt storage")
                raise StorageError(f"Could not open debt storage: {e}") from e

            self._engine = engine
            self._session_factory = make_session_factory(engine)
            logger.info(
                "Debt store opened (%s)",
                engine.url.render_as_string(hide_password=True),
            )
        return self

    def close(self) -> None:
        """Release all database connections."""
        with self._lock:
            if self._engine is None:
                return
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Debt store closed")

    def __enter__(self) -> "DebtStore":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[DebtService]:
        """
        Run one operation under the store lock in its own session.

        Expected failures (DebtError) roll back and propagate as they
        are. Database failures roll back and surface as StorageError.
        """
        with self._lock:
            if self._session_factory is None:
                raise StorageError("Debt store is not open")

            db = self._session_factory()
            try:
                yield DebtService(db, clock=self.clock)
                db.commit()
            except DebtError as e:
                db.rollback()
                logger.debug("%s rejected: %s", operation, e)
                raise
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception("%s failed in storage", operation)
                raise StorageError(f"{operation} failed: {e}") from e
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self._unit_of_work("ping") as service:
                service.db.execute(text("SELECT 1"))
        except StorageError:
            return False
        return True

    # --- Reads ---

    def list_debts(self) -> list[DebtRecord]:
        with self._unit_of_work("list") as service:
            return [DebtRecord.model_validate(d) for d in service.list_debts()]

    def total(self) -> Decimal:
        with self._unit_of_work("total") as service:
            return service.total()

    def search(self, query: str) -> list[DebtRecord]:
        with self._unit_of_work("search") as service:
            return [DebtRecord.model_validate(d) for d in service.search(query)]

    def get(self, debt_id: str) -> DebtRecord:
        with self._unit_of_work("get") as service:
            return DebtRecord.model_validate(service.get_debt(debt_id))

    # --- Writes ---

    def create(self, payload: DebtPayload | Mapping[str, Any]) -> DebtRecord:
        with self._unit_of_work("create") as service:
            record = DebtRecord.model_validate(service.create_debt(payload))
        logger.info("Created debt %s", record.id)
        return record

    def update(
        self, debt_id: str, payload: DebtPayload | Mapping[str, Any]
    ) -> DebtRecord:
        with self._unit_of_work("update") as service:
            record = DebtRecord.model_validate(
                service.update_debt(debt_id, payload)
            )
        logger.info("Updated debt %s", record.id)
        return record

    def delete(self, debt_id: str) -> DebtRecord:
        with self._unit_of_work("delete") as service:
            record = DebtRecord.model_validate(service.delete_debt(debt_id))
        logger.info("Deleted debt %s", record.id)
        return record
