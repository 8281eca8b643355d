"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from livefeed.core.extensions import db
from livefeed.repositories import PostRepository, UserRepository
from livefeed.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.posts = PostRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    Commits when the block exits cleanly, rolls back otherwise. A post insert
    and its link into the creator's collection therefore land together or not
    at all.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first write.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when none is running, and rolls it back on exit.
    - Attaches to an already-running transaction otherwise (no rollback).
    - Blocks ORM flushes carrying new/dirty/deleted objects.
    - Applies ``SET TRANSACTION READ ONLY`` on PostgreSQL when it owns the
      transaction.
    - Disallows ``commit()``.
    """

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=db.session)
        self.enforce_db_readonly = enforce_db_readonly
        self._txn_ctx: SessionTransaction | None = None
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            # A transaction already began on this session (autobegin or an
            # outer test fixture); attach to it.
            pass

        self._install_guard()

        if self._txn_ctx is not None and self.enforce_db_readonly:
            dialect = self.session.connection().dialect.name
            if dialect == "postgresql":
                try:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except SQLAlchemyError as exc:
                    logger.warning(
                        "SET TRANSACTION READ ONLY failed (%s); relying on flush guard.", exc
                    )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn_ctx is not None:
                try:
                    self.session.rollback()
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_guard()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guard --------------------------------------

    @staticmethod
    def _block_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _guard_target(self) -> Session:
        # Listen on the concrete session of this thread, never on the scoped
        # registry, so writers in other threads are unaffected.
        session = self.session
        if isinstance(session, scoped_session):
            return session()
        return session

    def _install_guard(self) -> None:
        if self._guard_installed:
            return
        event.listen(self._guard_target(), "before_flush", self._block_flush)
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        event.remove(self._guard_target(), "before_flush", self._block_flush)
        self._guard_installed = False
