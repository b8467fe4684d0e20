##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis implementation of the `DocumentStore` interface.

Layout in Redis:
- Each document is a hash at `<prefix><collection>:<key>` whose values are JSON
  (see `recordbase.backends.utils`).
- Each collection keeps a sorted set at `<prefix><collection>:__index__` holding
  the keys of its documents. Scores start from the clock and strictly increase
  per store, so documents keep the order they were first written in. It
  defines both document existence and the iteration order of `stream`.

Batches are `MULTI`/`EXEC` transactions, so the server applies the staged
commands of a batch together without interleaving other clients' commands.
"""

import logging
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from redis.asyncio import Redis
from redis.asyncio.client import Pipeline

from recordbase.backends.store_base import BatchBase, DocumentHandle, DocumentSnapshot, DocumentStore
from recordbase.backends.utils import deserialize_fields, serialize_fields
from recordbase.utils import now_ms


LOG = logging.getLogger(__name__)

INDEX_SUFFIX = "__index__"


class RedisBatch(BatchBase):
    """
    A batch of writes queued on a transactional Redis pipeline.

    Attributes:
        store (RedisDocumentStore): The store the batch writes to.
        pipeline (Pipeline): The transactional pipeline buffering the commands.
    """

    def __init__(self, store: "RedisDocumentStore"):
        super().__init__()
        self.store: RedisDocumentStore = store
        self.pipeline: Pipeline = store.client.pipeline(transaction=True)

    def _stage_set(self, handle: DocumentHandle, fields: Dict[str, Any]):
        self.store.queue_write(self.pipeline, handle.collection, handle.id, fields)

    async def _commit(self):
        LOG.debug(f"Executing Redis transaction with {len(self)} staged write(s)...")
        await self.pipeline.execute()


class RedisDocumentStore(DocumentStore):
    """
    A Redis-based document store.

    Attributes:
        client (Redis): The asyncio Redis client used for database operations.
        key_prefix (str): A prefix added to every Redis key, to share a database between applications.

    Methods:
        stream: Iterate over every document of a collection in insertion order.
        get: Read one document.
        set: Replace one document.
        update: Merge fields into one document.
        delete: Delete one document.
        batch: Start a new transactional batch.
        queue_write: Queue the commands of a document write on a pipeline.
        get_version: Query Redis for the current version.
        close: Close the Redis connection pool.
    """

    store_name = "redis"

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = "",
        ssl_cert_reqs: Optional[str] = None,
        client: Optional[Redis] = None,
    ):
        """
        Initialize the store, connecting lazily to the Redis server at `url`.

        Args:
            url: The Redis connection url. Use a `rediss://` url for TLS.
            key_prefix: A prefix added to every Redis key.
            ssl_cert_reqs: Certificate requirements for TLS connections (e.g. "required", "none").
            client: An existing client to use instead of creating one from `url`.
        """
        if client is None:
            redis_config = {"url": url, "decode_responses": True}
            if url.startswith("rediss://"):
                redis_config["ssl_cert_reqs"] = ssl_cert_reqs or "required"
            client = Redis.from_url(**redis_config)
        self.client: Redis = client
        self.key_prefix: str = key_prefix
        self._last_score: int = 0

    def _document_key(self, name: str, key: str) -> str:
        """
        Get the Redis key of a document's hash.

        Args:
            name: The name of the collection.
            key: The key of the document.

        Returns:
            The full Redis key.
        """
        return f"{self.key_prefix}{name}:{key}"

    def _index_key(self, name: str) -> str:
        """
        Get the Redis key of a collection's index.

        Args:
            name: The name of the collection.

        Returns:
            The full Redis key.
        """
        return f"{self.key_prefix}{name}:{INDEX_SUFFIX}"

    def _next_score(self) -> int:
        """
        Get the index score of the next document this store writes. Scores start at
        the current time in milliseconds and strictly increase, so documents written
        within the same millisecond keep the order they were staged in.

        Returns:
            The score.
        """
        self._last_score = max(now_ms(), self._last_score + 1)
        return self._last_score

    def queue_write(self, pipeline: Pipeline, name: str, key: str, fields: Mapping[str, Any], merge: bool = False):
        """
        Queue the commands that write one document on `pipeline`.

        Args:
            pipeline: The pipeline to queue the commands on.
            name: The name of the collection.
            key: The key of the document.
            fields: The fields to write.
            merge: If True, overwrite only the given fields. Otherwise replace the document.
        """
        document_key = self._document_key(name, key)
        if not merge:
            pipeline.delete(document_key)
        if fields:
            pipeline.hset(document_key, mapping=serialize_fields(fields))
        pipeline.zadd(self._index_key(name), {key: self._next_score()}, nx=True)

    async def stream(self, name: str) -> AsyncIterator[DocumentSnapshot]:
        """
        Iterate over every document of a collection in the order they were first written.

        Args:
            name: The name of the collection.

        Yields:
            A snapshot of each document.
        """
        LOG.debug(f"Streaming documents of collection '{name}' from Redis...")
        keys = await self.client.zrange(self._index_key(name), 0, -1)
        for key in keys:
            data = await self.client.hgetall(self._document_key(name, key))
            yield DocumentSnapshot(key, deserialize_fields(data))

    async def get(self, name: str, key: str) -> Optional[DocumentSnapshot]:
        LOG.debug(f"Retrieving document '{key}' of collection '{name}' from Redis.")
        if await self.client.zscore(self._index_key(name), key) is None:
            return None
        data = await self.client.hgetall(self._document_key(name, key))
        return DocumentSnapshot(key, deserialize_fields(data))

    async def _write(self, name: str, key: str, fields: Mapping[str, Any], merge: bool):
        """
        Write one document in its own transaction.

        Args:
            name: The name of the collection.
            key: The key of the document.
            fields: The fields to write.
            merge: If True, overwrite only the given fields. Otherwise replace the document.
        """
        pipeline = self.client.pipeline(transaction=True)
        self.queue_write(pipeline, name, key, fields, merge=merge)
        await pipeline.execute()

    async def set(self, name: str, key: str, fields: Mapping[str, Any]):
        LOG.debug(f"Setting document '{key}' of collection '{name}' in Redis...")
        await self._write(name, key, fields, merge=False)

    async def update(self, name: str, key: str, fields: Mapping[str, Any]):
        LOG.debug(f"Updating document '{key}' of collection '{name}' in Redis...")
        await self._write(name, key, fields, merge=True)

    async def delete(self, name: str, key: str):
        LOG.debug(f"Deleting document '{key}' of collection '{name}' from Redis...")
        pipeline = self.client.pipeline(transaction=True)
        pipeline.delete(self._document_key(name, key))
        pipeline.zrem(self._index_key(name), key)
        await pipeline.execute()

    def batch(self) -> RedisBatch:
        return RedisBatch(self)

    async def get_version(self) -> str:
        """
        Query Redis for the current version.

        Returns:
            A string representing the current version of Redis.
        """
        client_info = await self.client.info()
        return client_info.get("redis_version", "N/A")

    async def close(self):
        """
        Close the Redis connection pool.
        """
        await self.client.aclose()
