"""Unit of Work abstractions and concrete implementations.

Services depend on the abstract contract; the SQLAlchemy-backed units share
the Flask-scoped session across the user and post repositories.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
