"""Unit tests for InMemoryEventRepository."""

import pytest

from threadline.domain.value import kinds
from threadline.persistence.repository.inmemory import InMemoryEventRepository
from tests.conftest import (
    CAROL,
    make_comment,
    make_event,
    make_repository,
    make_status,
    repo_address,
    root_pointer,
)


class TestFindByAddress:
    """Tests for addressable lookups."""

    @pytest.mark.asyncio
    async def test_latest_version_wins(self):
        """The newest version of an addressable event is returned."""
        # Arrange
        repo = InMemoryEventRepository()
        await repo.save(make_repository(created_at=1))
        await repo.save(make_repository(created_at=5, maintainers=["b" * 64]))
        await repo.save(make_repository(identifier="other", created_at=9))

        # Act
        found = await repo.find_by_address(repo_address())

        # Assert
        assert found.created_at == 5

    @pytest.mark.asyncio
    async def test_missing_address(self):
        """Unknown addresses return None."""
        repo = InMemoryEventRepository()
        await repo.save(make_repository(owner=CAROL))

        assert await repo.find_by_address(repo_address(owner="d" * 64)) is None


class TestFindReferencing:
    """Tests for tag-based queries."""

    @pytest.mark.asyncio
    async def test_filters_by_kind_and_tag(self):
        """Only events of the given kinds carrying the tag value match."""
        # Arrange
        repo = InMemoryEventRepository()
        await repo.save(make_comment("c1", root_pointer("r1"), created_at=1))
        await repo.save(make_comment("c2", root_pointer("r2"), created_at=2))
        await repo.save(make_event("n1", tags=[["E", "r1"]], created_at=3))

        # Act
        found = await repo.find_referencing([kinds.COMMENT], "E", ["r1"])

        # Assert
        assert [e.id for e in found] == ["c1"]

    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self):
        """Results come newest first and are truncated to the limit."""
        # Arrange
        repo = InMemoryEventRepository()
        for i in range(5):
            await repo.save(make_status(f"s{i}", "i1", created_at=i))

        # Act
        found = await repo.find_referencing(kinds.STATUS_KINDS, "e", ["i1"], limit=2)

        # Assert
        assert [e.id for e in found] == ["s4", "s3"]

    @pytest.mark.asyncio
    async def test_save_is_idempotent(self):
        """Saving the same id twice keeps one copy."""
        repo = InMemoryEventRepository()
        event = make_event("n1")
        await repo.save(event)
        await repo.save(event)

        assert await repo.find_by_id("n1") == event
