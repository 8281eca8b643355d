"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Session resolution (injected session or the Flask-scoped one).
- Primary-key lookups, staging, deletion and flushing.
- Offset/limit windows with a separate total count.
- No business logic, no commit/rollback; Services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; Services define the Unit of Work.
* Eager-loading is opt-in via ``_default_eagerload`` to avoid N+1.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from livefeed.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


def window_select(
    session: Session,
    stmt: Select[Any],
    *,
    skip: int,
    limit: int,
) -> list[Any]:
    """Execute ``stmt`` restricted to ``limit`` rows after skipping ``skip``.

    :param session: Active SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Base select, already filtered and ordered.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param skip: Rows to skip (clamped to ``>= 0``).
    :type skip: int
    :param limit: Maximum rows to return (clamped to ``>= 1``).
    :type limit: int
    :returns: Entities in the window.
    :rtype: list[Any]
    """
    skip = max(int(skip), 0)
    limit = max(int(limit), 1)
    return list(session.execute(stmt.offset(skip).limit(limit)).scalars().all())


def count_select(session: Session, stmt: Select[Any]) -> int:
    """Count the rows ``stmt`` would return, ignoring its ``ORDER BY``.

    :param session: Active SQLAlchemy session.
    :param stmt: Base select.
    :returns: Row count.
    :rtype: int
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return int(session.execute(count_stmt).scalar_one())


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``_default_eagerload`` to attach eager-loading options.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``livefeed.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic get/list operations.

        :param stmt: Base select.
        :type stmt: :class:`sqlalchemy.sql.Select`
        :returns: Potentially modified select with eager options.
        :rtype: :class:`sqlalchemy.sql.Select`
        """
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        pk = getattr(self.model, "id", None)
        if pk is None:
            raise RuntimeError(f"{self.__class__.__name__} requires a model with an 'id' column.")
        return cast(InstrumentedAttribute[Any], pk)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage an entity for persistence and flush to materialize the PK.

        :param instance: New or modified entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :param entity_id: Primary-key value.
        :type entity_id: Any
        :returns: Entity or ``None``.
        :rtype: E | None
        """
        stmt = self._default_eagerload(select(self.model).where(self._pk_attr() == entity_id))
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def get_for_update(self, entity_id: Any) -> E | None:
        """Retrieve an entity by PK with a ``FOR UPDATE`` lock (when supported).

        SQLite ignores the lock clause; PostgreSQL serializes concurrent
        writers on the same row.
        """
        stmt = self._default_eagerload(
            select(self.model).where(self._pk_attr() == entity_id)
        ).with_for_update(of=self.model)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def delete(self, instance: E) -> None:
        """Delete an entity and flush changes.

        :param instance: Entity to delete.
        :type instance: E
        """
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()

    def count(self) -> int:
        """Return the number of rows of the aggregate."""
        return count_select(self.session, select(self.model))

    def list_window(self, stmt: Select[Any], *, skip: int, limit: int) -> Sequence[E]:
        """Execute ``stmt`` with eager options inside an offset/limit window."""
        stmt = self._default_eagerload(stmt)
        return cast(Sequence[E], window_select(self.session, stmt, skip=skip, limit=limit))
