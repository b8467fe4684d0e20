##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the abstract base classes for all document store implementations
in Recordbase.

It provides:
- `DocumentStore`, the interface every backend implements: handle resolution, key
  allocation, single-document reads and writes, collection streaming, and batches.
- `BatchBase`, the interface of an atomic group of staged writes.
- `DocumentHandle` and `CollectionHandle`, lightweight references used by the
  backends that don't ship their own reference types.
- `DocumentSnapshot` and `GeoPoint`, the value types those backends return.

The handle and snapshot shapes follow the Firestore client library, so records
read from any backend look the same to the access layer.
"""

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from recordbase.exceptions import BatchCommitError
from recordbase.utils import generate_auto_id


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoPoint:
    """
    An immutable latitude/longitude pair. This is the native geographic type of
    every store that doesn't provide its own.

    Attributes:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
    """

    latitude: float
    longitude: float


class DocumentSnapshot:
    """
    The contents of a single document at the time it was read.

    Attributes:
        id: The opaque key of the document.
        exists: Always True; stores return None for missing documents.
    """

    def __init__(self, key: str, data: Optional[Dict[str, Any]]):
        self.id: str = key
        self.exists: bool = True
        self._data: Dict[str, Any] = data or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the fields of the document.

        Returns:
            A copy of the document's field mapping.
        """
        return deepcopy(self._data)

    def __repr__(self) -> str:
        return f"DocumentSnapshot(id={self.id!r}, data={self._data!r})"


class DocumentHandle:
    """
    A reference to a single document of a collection.

    Attributes:
        store: The store the document lives in.
        collection: The name of the collection the document belongs to.
        id: The opaque key of the document.
    """

    def __init__(self, store: "DocumentStore", collection: str, key: str):
        self.store = store
        self.collection: str = collection
        self.id: str = key

    @property
    def path(self) -> str:
        """The slash separated path of the document."""
        return f"{self.collection}/{self.id}"

    async def get(self) -> Optional[DocumentSnapshot]:
        """Read the document; None if it doesn't exist."""
        return await self.store.get(self.collection, self.id)

    async def set(self, fields: Mapping[str, Any]):
        """Replace the document with `fields`."""
        await self.store.set(self.collection, self.id, fields)

    async def update(self, fields: Mapping[str, Any]):
        """Merge `fields` into the document."""
        await self.store.update(self.collection, self.id, fields)

    async def delete(self):
        """Delete the document."""
        await self.store.delete(self.collection, self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentHandle):
            return NotImplemented
        return self.store is other.store and self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"DocumentHandle(path={self.path!r})"


class CollectionHandle:
    """
    A reference to a collection of documents.

    Attributes:
        store: The store the collection lives in.
        id: The name of the collection.
    """

    def __init__(self, store: "DocumentStore", name: str):
        self.store = store
        self.id: str = name

    def document(self, key: Optional[str] = None) -> DocumentHandle:
        """
        Get a handle to a document of this collection.

        Args:
            key: The key of the document. If omitted, a fresh key is allocated.

        Returns:
            A handle to the document.
        """
        if key is None:
            return self.store.new_document(self.id)
        return self.store.document(self.id, key)

    def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Iterate over every document of the collection."""
        return self.store.stream(self.id)

    def __repr__(self) -> str:
        return f"CollectionHandle(id={self.id!r})"


class BatchBase(ABC):
    """
    Base class for an atomic group of writes.

    A batch starts empty, accumulates staged writes, and is committed exactly once.
    Either every staged write is applied or none are. Once `commit` has been called
    the batch is spent, whether the commit succeeded or not.

    Attributes:
        committed (bool): Whether `commit` has been called on this batch.

    Methods:
        set: Stage a write that replaces a document with the given fields.
        commit: Apply every staged write atomically.
    """

    def __init__(self):
        self.committed: bool = False
        self._staged: int = 0

    def __len__(self) -> int:
        return self._staged

    def _ensure_open(self):
        """
        Raises:
            BatchCommitError: If the batch has already been committed.
        """
        if self.committed:
            raise BatchCommitError("This batch has already been committed and can't be reused.")

    def set(self, handle: Any, fields: Mapping[str, Any]) -> "BatchBase":
        """
        Stage a write that replaces the document behind `handle` with `fields`.

        Args:
            handle: A document handle produced by the same store as this batch.
            fields: The exact field set to persist.

        Returns:
            This batch, so calls can be chained.
        """
        self._ensure_open()
        self._stage_set(handle, dict(fields))
        self._staged += 1
        LOG.debug(f"Staged write {self._staged} of batch for document '{handle.id}'.")
        return self

    async def commit(self):
        """
        Apply every staged write atomically.

        Raises:
            BatchCommitError: If the batch was already committed or the store rejected it.
                In the latter case none of the staged writes were applied.
        """
        self._ensure_open()
        self.committed = True
        try:
            await self._commit()
        except BatchCommitError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise BatchCommitError(f"The store rejected a batch of {self._staged} write(s): {exc}") from exc

    @abstractmethod
    def _stage_set(self, handle: Any, fields: Dict[str, Any]):
        """
        Record a set-operation in the backend's batch primitive.

        Args:
            handle: A document handle produced by the same store as this batch.
            fields: The exact field set to persist.
        """
        raise NotImplementedError("Subclasses of `BatchBase` must implement a `_stage_set` method.")

    @abstractmethod
    async def _commit(self):
        """
        Apply the staged writes using the backend's atomic primitive.
        """
        raise NotImplementedError("Subclasses of `BatchBase` must implement a `_commit` method.")


class DocumentStore(ABC):
    """
    Base class for all document stores supported in Recordbase.

    Attributes:
        store_name (str): The name of the store (e.g., "redis").

    Methods:
        collection: Get a handle bound to a whole collection.
        document: Get a handle bound to one document.
        new_document: Get a handle bound to a document with a freshly allocated key.
        geo_point: Build a value of the store's native geographic type.
        stream: Iterate over every document of a collection.
        get: Read one document.
        set: Replace one document.
        update: Merge fields into one document.
        delete: Delete one document.
        batch: Start a new, empty batch.
        get_version: Query the store for its version.
        close: Release the store's connection.
    """

    store_name: str = None

    def collection(self, name: str) -> CollectionHandle:
        """
        Get a handle bound to a whole collection.

        Args:
            name: The name of the collection.

        Returns:
            A handle to the collection.
        """
        return CollectionHandle(self, name)

    def document(self, name: str, key: str) -> DocumentHandle:
        """
        Get a handle bound to one document.

        Args:
            name: The name of the collection.
            key: The key of the document.

        Returns:
            A handle to the document.
        """
        return DocumentHandle(self, name, key)

    def new_document(self, name: str) -> DocumentHandle:
        """
        Get a handle bound to a document with a freshly allocated key. Nothing
        is written until the handle is used in a write.

        Args:
            name: The name of the collection.

        Returns:
            A handle to the new document.
        """
        return DocumentHandle(self, name, generate_auto_id())

    def geo_point(self, latitude: float, longitude: float) -> Any:
        """
        Build a value of the store's native geographic type.

        Args:
            latitude: Latitude in degrees.
            longitude: Longitude in degrees.

        Returns:
            An immutable coordinate pair.
        """
        return GeoPoint(latitude, longitude)

    @abstractmethod
    def stream(self, name: str) -> AsyncIterator[Any]:
        """
        Iterate over every document of a collection. The iterator is finite and
        single-pass.

        Args:
            name: The name of the collection.

        Returns:
            An async iterator of document snapshots.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `stream` method.")

    @abstractmethod
    async def get(self, name: str, key: str) -> Optional[Any]:
        """
        Read one document.

        Args:
            name: The name of the collection.
            key: The key of the document.

        Returns:
            A document snapshot, or None if the document doesn't exist.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `get` method.")

    @abstractmethod
    async def set(self, name: str, key: str, fields: Mapping[str, Any]):
        """
        Replace one document with `fields`, creating it if needed.

        Args:
            name: The name of the collection.
            key: The key of the document.
            fields: The exact field set to persist.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `set` method.")

    @abstractmethod
    async def update(self, name: str, key: str, fields: Mapping[str, Any]):
        """
        Merge `fields` into one document, creating it if needed.

        Args:
            name: The name of the collection.
            key: The key of the document.
            fields: The fields to overwrite.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement an `update` method.")

    @abstractmethod
    async def delete(self, name: str, key: str):
        """
        Delete one document. Deleting a missing document is not an error.

        Args:
            name: The name of the collection.
            key: The key of the document.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `delete` method.")

    @abstractmethod
    def batch(self) -> BatchBase:
        """
        Start a new, empty batch. Nothing is persisted until the batch is committed.

        Returns:
            A new batch.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `batch` method.")

    @abstractmethod
    async def get_version(self) -> str:
        """
        Query the store for the current version.

        Returns:
            A string representing the current version of the store.
        """
        raise NotImplementedError("Subclasses of `DocumentStore` must implement a `get_version` method.")

    async def close(self):
        """
        Release the store's connection. The default implementation has nothing to release.
        """
