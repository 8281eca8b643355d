# livefeed/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from livefeed.services._shared.errors import Forbidden
from livefeed.services._shared.policies.common import is_owner
from livefeed.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param request_id: Correlation id for logging/tracing.
    """

    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize the ownership check.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Side effects that must only follow a durable change (events, blob
      deletion) run after the read-write block has exited.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    # --------------------------- AuthZ --------------------------------
    def ensure_owner(self, actor_id: int | str | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id.
        :param owner_id: Expected owner id.
        :param msg: Optional custom error message.
        :raises Forbidden: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise Forbidden(msg)
