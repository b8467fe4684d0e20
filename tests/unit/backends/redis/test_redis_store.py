##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `redis_store.py` module.
"""

from typing import Any, Dict

import pytest
from pytest_mock import MockerFixture
from redis.exceptions import ResponseError

from recordbase.backends.redis.redis_store import RedisBatch, RedisDocumentStore
from recordbase.backends.store_base import GeoPoint
from recordbase.exceptions import BatchCommitError
from recordbase.records.context import AccessContext
from tests.fixtures.records import NotesModel


@pytest.fixture
def redis_store(stores_mock_redis: Dict[str, Any], mocker: MockerFixture) -> RedisDocumentStore:
    """
    A Redis store backed by a mock client with a frozen clock.

    Args:
        stores_mock_redis: A mock Redis client and pipeline.
        mocker: PyTest mocker fixture.

    Returns:
        A `RedisDocumentStore` instance.
    """
    mocker.patch("recordbase.backends.redis.redis_store.now_ms", return_value=1000)
    return RedisDocumentStore(key_prefix="app:", client=stores_mock_redis["client"])


class TestRedisDocumentStoreInit:
    """
    Tests for how `RedisDocumentStore` builds its client.
    """

    def test_from_url(self, mocker: MockerFixture):
        """
        Test that a plain url is passed to `Redis.from_url` with decoded responses.

        Args:
            mocker: PyTest mocker fixture.
        """
        from_url = mocker.patch("recordbase.backends.redis.redis_store.Redis.from_url")
        store = RedisDocumentStore(url="redis://db:6379/2")
        from_url.assert_called_once_with(url="redis://db:6379/2", decode_responses=True)
        assert store.client is from_url.return_value

    def test_tls_url(self, mocker: MockerFixture):
        """
        Test that a `rediss://` url requires certificates by default.

        Args:
            mocker: PyTest mocker fixture.
        """
        from_url = mocker.patch("recordbase.backends.redis.redis_store.Redis.from_url")
        RedisDocumentStore(url="rediss://db:6380/0")
        from_url.assert_called_once_with(url="rediss://db:6380/0", decode_responses=True, ssl_cert_reqs="required")


class TestRedisDocumentStoreWrites:
    """
    Tests for the write commands queued by `RedisDocumentStore`.
    """

    @pytest.mark.asyncio
    async def test_set(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that `set` replaces the hash and indexes the key in one transaction.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        await redis_store.set("groups", "g1", {"name": "Tools", "location": GeoPoint(1.0, 2.0)})

        stores_mock_redis["client"].pipeline.assert_called_once_with(transaction=True)
        pipeline.delete.assert_called_once_with("app:groups:g1")
        pipeline.hset.assert_called_once_with(
            "app:groups:g1", mapping={"name": '"Tools"', "location": '{"__geopoint__": [1.0, 2.0]}'}
        )
        pipeline.zadd.assert_called_once_with("app:groups:__index__", {"g1": 1000}, nx=True)
        pipeline.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_merges(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that `update` doesn't delete the existing hash.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        await redis_store.update("groups", "g1", {"description": "x"})
        pipeline.delete.assert_not_called()
        pipeline.hset.assert_called_once_with("app:groups:g1", mapping={"description": '"x"'})

    @pytest.mark.asyncio
    async def test_set_empty_document(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that an empty document is only indexed, since Redis can't store an empty hash.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        await redis_store.set("groups", "g1", {})
        pipeline.hset.assert_not_called()
        pipeline.zadd.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that `delete` removes the hash and the index entry together.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        await redis_store.delete("groups", "g1")
        pipeline.delete.assert_called_once_with("app:groups:g1")
        pipeline.zrem.assert_called_once_with("app:groups:__index__", "g1")
        pipeline.execute.assert_awaited_once()


class TestRedisDocumentStoreReads:
    """
    Tests for the reads of `RedisDocumentStore`.
    """

    @pytest.mark.asyncio
    async def test_get_existing(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that an indexed document is read and deserialized.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        client = stores_mock_redis["client"]
        client.zscore.return_value = 1000.0
        client.hgetall.return_value = {"name": '"Tools"', "createdAt": "5"}

        snapshot = await redis_store.get("groups", "g1")

        client.zscore.assert_awaited_once_with("app:groups:__index__", "g1")
        client.hgetall.assert_awaited_once_with("app:groups:g1")
        assert snapshot.id == "g1"
        assert snapshot.to_dict() == {"name": "Tools", "createdAt": 5}

    @pytest.mark.asyncio
    async def test_get_missing(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that a document missing from the index reads as None.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        stores_mock_redis["client"].zscore.return_value = None
        assert await redis_store.get("groups", "g1") is None
        stores_mock_redis["client"].hgetall.assert_not_called()

    @pytest.mark.asyncio
    async def test_stream_in_index_order(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that documents stream in index order.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        client = stores_mock_redis["client"]
        client.zrange.return_value = ["g2", "g1"]
        client.hgetall.side_effect = [{"name": '"Paint"'}, {"name": '"Tools"'}]

        snapshots = [snapshot async for snapshot in redis_store.stream("groups")]

        client.zrange.assert_awaited_once_with("app:groups:__index__", 0, -1)
        assert [(s.id, s.to_dict()["name"]) for s in snapshots] == [("g2", "Paint"), ("g1", "Tools")]

    @pytest.mark.asyncio
    async def test_get_version(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that the version comes from `INFO`.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        stores_mock_redis["client"].info.return_value = {"redis_version": "7.2.4"}
        assert await redis_store.get_version() == "7.2.4"
        stores_mock_redis["client"].info.return_value = {}
        assert await redis_store.get_version() == "N/A"

    @pytest.mark.asyncio
    async def test_close(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that closing the store closes the client.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        await redis_store.close()
        stores_mock_redis["client"].aclose.assert_awaited_once()


class TestRedisBatch:
    """
    Tests for the `RedisBatch` class.
    """

    @pytest.mark.asyncio
    async def test_commit_executes_one_transaction(
        self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]
    ):
        """
        Test that every staged write is queued on one pipeline executed at commit.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        batch = redis_store.batch()
        assert isinstance(batch, RedisBatch)

        first = redis_store.new_document("groups")
        second = redis_store.new_document("items")
        batch.set(first, {"name": "Tools"}).set(second, {"name": "Hammer"})
        pipeline.execute.assert_not_called()

        await batch.commit()

        assert pipeline.hset.call_count == 2
        pipeline.zadd.assert_any_call("app:groups:__index__", {first.id: 1000}, nx=True)
        pipeline.zadd.assert_any_call("app:items:__index__", {second.id: 1001}, nx=True)
        pipeline.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejected_transaction(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that a failed `EXEC` raises `BatchCommitError`.

        Args:
            redis_store: A Redis store backed by a mock client.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        stores_mock_redis["pipeline"].execute.side_effect = ResponseError("EXECABORT")
        batch = redis_store.batch()
        batch.set(redis_store.document("groups", "g1"), {"name": "Tools"})

        with pytest.raises(BatchCommitError, match="EXECABORT"):
            await batch.commit()


class TestRedisInsertionOrder:
    """
    Tests for the order of the collection index when many documents are written
    within the same millisecond.
    """

    def test_scores_strictly_increase(self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]):
        """
        Test that writes on a frozen clock still get increasing index scores.

        Args:
            redis_store: A Redis store backed by a mock client with a frozen clock.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        pipeline = stores_mock_redis["pipeline"]
        for key in ("c", "a", "b"):
            redis_store.queue_write(pipeline, "notes", key, {"n": key})

        scores = [call.args[1] for call in pipeline.zadd.call_args_list]
        assert scores == [{"c": 1000}, {"a": 1001}, {"b": 1002}]

    def test_scores_follow_the_clock(self, mocker: MockerFixture, stores_mock_redis: Dict[str, Any]):
        """
        Test that the scores jump forward with the clock once it passes the last score.

        Args:
            mocker: PyTest mocker fixture.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        mocker.patch("recordbase.backends.redis.redis_store.now_ms", side_effect=[1000, 1000, 5000])
        store = RedisDocumentStore(client=stores_mock_redis["client"])
        assert [store._next_score() for _ in range(3)] == [1000, 1001, 5000]

    @pytest.mark.asyncio
    async def test_batch_keeps_staging_order(
        self, redis_store: RedisDocumentStore, stores_mock_redis: Dict[str, Any]
    ):
        """
        Test that records staged in one batch are listed in the order they were staged,
        not in the order of their random keys.

        Args:
            redis_store: A Redis store backed by a mock client with a frozen clock.
            stores_mock_redis: A mock Redis client and pipeline.
        """
        index = {}
        hashes = {}
        pipeline = stores_mock_redis["pipeline"]
        pipeline.zadd.side_effect = lambda _name, mapping, nx: index.update(mapping)
        pipeline.hset.side_effect = lambda name, mapping: hashes.update({name: mapping})

        client = stores_mock_redis["client"]
        client.zrange.side_effect = lambda *_args: sorted(index, key=index.get)
        client.hgetall.side_effect = lambda name: hashes.get(name, {})

        model = NotesModel(AccessContext(store=redis_store))
        batch = model.begin_batch()
        staged = [model.stage_create(batch, fields={"position": position}) for position in range(6)]
        await model.commit_batch(batch)

        listed = await model.list_all()
        assert [note["id"] for note in listed] == staged
        assert [note["position"] for note in listed] == list(range(6))
