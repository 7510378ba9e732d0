"""Unit tests for the unit of work."""

import pytest

from vaultsync.db.unit_of_work import UnitOfWork

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_commits_on_clean_exit(mock_db):
    async with UnitOfWork(mock_db) as uow:
        pass

    mock_db.commit.assert_awaited_once()
    mock_db.rollback.assert_not_called()
    assert uow.committed
    assert not uow.rolledback


@pytest.mark.asyncio
async def test_rolls_back_and_propagates(mock_db):
    with pytest.raises(ValueError):
        async with UnitOfWork(mock_db) as uow:
            raise ValueError("boom")

    mock_db.rollback.assert_awaited_once()
    mock_db.commit.assert_not_called()
    assert uow.rolledback
    assert not uow.committed


@pytest.mark.asyncio
async def test_finished_transaction_is_not_reused(mock_db):
    uow = UnitOfWork(mock_db)
    await uow.rollback()
    await uow.commit()
    await uow.rollback()

    mock_db.rollback.assert_awaited_once()
    mock_db.commit.assert_not_called()
