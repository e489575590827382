"""
Unit tests for SavedFilterRepository (Redis hash per organisation).
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError

from cassius.exceptions import (
    InvalidFilterFormatError,
    StorageError,
    StorageUnavailableError,
)
from cassius.models.enums import SavedFilterPageType
from cassius.models.saved_filter import SavedFilter
from cassius.repositories.saved_filter_repository import SavedFilterRepository


def _saved_filter(filter_id, page_type=SavedFilterPageType.IMPLANTS, day=10) -> SavedFilter:
    return SavedFilter(
        id=filter_id,
        organisation_id="org-1",
        name=f"Filtre {filter_id}",
        page_type=page_type,
        filter_data='{"id":"g1","operator":"AND","rules":[]}',
        created_at=datetime(2026, 3, day, 9, 0, tzinfo=timezone.utc),
    )


def _raw(saved_filter: SavedFilter) -> str:
    return saved_filter.model_dump_json(by_alias=True)


@pytest.fixture
def mock_redis_client():
    client = AsyncMock()
    client.hgetall = AsyncMock(return_value={})
    client.hget = AsyncMock(return_value=None)
    client.hset = AsyncMock(return_value=1)
    client.hdel = AsyncMock(return_value=1)
    return client


@pytest.fixture
def repository(mock_redis_client):
    return SavedFilterRepository(redis_client=mock_redis_client, key_prefix="saved_filters")


class TestListByPage:

    @pytest.mark.asyncio
    async def test_filters_page_and_sorts_newest_first(self, repository, mock_redis_client):
        old = _saved_filter("a", day=1)
        new = _saved_filter("b", day=20)
        other_page = _saved_filter("c", page_type=SavedFilterPageType.PROTHESES, day=15)
        mock_redis_client.hgetall.return_value = {
            "a": _raw(old), "b": _raw(new), "c": _raw(other_page)
        }

        result = await repository.list_by_page("org-1", SavedFilterPageType.IMPLANTS)

        assert [sf.id for sf in result] == ["b", "a"]
        mock_redis_client.hgetall.assert_awaited_once_with("saved_filters:org-1")

    @pytest.mark.asyncio
    async def test_unreadable_records_are_skipped(self, repository, mock_redis_client):
        mock_redis_client.hgetall.return_value = {
            "a": _raw(_saved_filter("a")), "broken": "{oops"
        }

        result = await repository.list_by_page("org-1", SavedFilterPageType.IMPLANTS)

        assert [sf.id for sf in result] == ["a"]

    @pytest.mark.asyncio
    async def test_redis_error_raises_storage_error(self, repository, mock_redis_client):
        mock_redis_client.hgetall.side_effect = RedisConnectionError("down")

        with pytest.raises(StorageError):
            await repository.list_by_page("org-1", SavedFilterPageType.IMPLANTS)


class TestCreate:

    @pytest.mark.asyncio
    async def test_writes_camel_case_record(self, repository, mock_redis_client):
        saved_filter = _saved_filter("a")

        result = await repository.create(saved_filter)

        assert result is saved_filter
        key, field, value = mock_redis_client.hset.call_args[0]
        assert key == "saved_filters:org-1"
        assert field == "a"
        assert '"organisationId":"org-1"' in value
        assert '"pageType":"implants"' in value
        assert '"filterData"' in value

    @pytest.mark.asyncio
    async def test_redis_error_message(self, repository, mock_redis_client):
        mock_redis_client.hset.side_effect = RedisError("READONLY")

        with pytest.raises(StorageError) as exc_info:
            await repository.create(_saved_filter("a"))

        assert exc_info.value.message == "Impossible de sauvegarder le filtre."
        assert exc_info.value.error_code == "STORAGE_ERROR"


class TestGet:

    @pytest.mark.asyncio
    async def test_returns_record(self, repository, mock_redis_client):
        mock_redis_client.hget.return_value = _raw(_saved_filter("a"))

        result = await repository.get("org-1", "a")

        assert result == _saved_filter("a")
        mock_redis_client.hget.assert_awaited_once_with("saved_filters:org-1", "a")

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, repository):
        assert await repository.get("org-1", "missing") is None

    @pytest.mark.asyncio
    async def test_corrupt_record_raises_invalid_format(self, repository, mock_redis_client):
        mock_redis_client.hget.return_value = '{"id": "a"}'

        with pytest.raises(InvalidFilterFormatError):
            await repository.get("org-1", "a")


class TestDelete:

    @pytest.mark.asyncio
    async def test_returns_true_when_removed(self, repository, mock_redis_client):
        assert await repository.delete("org-2", "a") is True
        mock_redis_client.hdel.assert_awaited_once_with("saved_filters:org-2", "a")

    @pytest.mark.asyncio
    async def test_returns_false_when_missing(self, repository, mock_redis_client):
        mock_redis_client.hdel.return_value = 0
        assert await repository.delete("org-1", "a") is False

    @pytest.mark.asyncio
    async def test_redis_error_message(self, repository, mock_redis_client):
        mock_redis_client.hdel.side_effect = RedisError("timeout")

        with pytest.raises(StorageError) as exc_info:
            await repository.delete("org-1", "a")

        assert exc_info.value.message == "Impossible de supprimer le filtre."


class TestWithoutConnection:

    @pytest.mark.asyncio
    async def test_every_operation_raises_unavailable(self):
        repository = SavedFilterRepository(redis_client=None)

        with pytest.raises(StorageUnavailableError):
            await repository.list_by_page("org-1", SavedFilterPageType.IMPLANTS)
        with pytest.raises(StorageUnavailableError):
            await repository.create(_saved_filter("a"))
        with pytest.raises(StorageUnavailableError):
            await repository.get("org-1", "a")
        with pytest.raises(StorageUnavailableError):
            await repository.delete("org-1", "a")

    def test_default_key_prefix_from_config(self):
        repository = SavedFilterRepository(redis_client=None)
        assert repository._key("org-9") == "saved_filters:org-9"
