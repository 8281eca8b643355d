"""
Unit tests for the SQLAlchemy units of work, using factories.
"""

from __future__ import annotations

import pytest
from livefeed.models import User
from livefeed.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db, session):
        initial = db.session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        assert db.session.query(User).count() == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db, session):
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert db.session.query(User).count() == initial


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        with SQLAlchemyReadOnlyUnitOfWork() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_allows_reads(self, session):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            assert uow.users.count() >= 1

    def test_disallows_commit(self, session):
        with SQLAlchemyReadOnlyUnitOfWork() as uow, pytest.raises(RuntimeError):
            uow.commit()

    def test_guard_is_removed_on_exit(self, session):
        with SQLAlchemyReadOnlyUnitOfWork():
            pass

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
