##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
In-memory implementation of the `DocumentStore` interface, used for local mode.

Collections are insertion-ordered dictionaries held by the process. Every write,
single or batched, is applied to a copy of the data which then replaces the
original, so a failure part way through a batch leaves nothing behind.
"""

import logging
from copy import deepcopy
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

from recordbase import __version__
from recordbase.backends.store_base import BatchBase, DocumentHandle, DocumentSnapshot, DocumentStore


LOG = logging.getLogger(__name__)

SET = "set"
MERGE = "merge"
DELETE = "delete"

# (operation, collection name, document key, fields)
BatchWrite = Tuple[str, str, str, Optional[Dict[str, Any]]]


class MemoryBatch(BatchBase):
    """
    A batch of writes held in a list until commit.

    Attributes:
        store (MemoryDocumentStore): The store the batch writes to.
    """

    def __init__(self, store: "MemoryDocumentStore"):
        super().__init__()
        self.store: MemoryDocumentStore = store
        self._writes: List[BatchWrite] = []

    def _stage_set(self, handle: DocumentHandle, fields: Dict[str, Any]):
        self._writes.append((SET, handle.collection, handle.id, deepcopy(fields)))

    async def _commit(self):
        self.store.apply_writes(self._writes)


class MemoryDocumentStore(DocumentStore):
    """
    A document store that keeps every document in process memory.

    Attributes:
        collections (Dict[str, Dict[str, Dict]]): Collection name -> document key -> fields.
    """

    store_name = "memory"

    def __init__(self, collections: Optional[Dict[str, Dict[str, Dict]]] = None):
        """
        Initialize the store.

        Args:
            collections: Initial contents, copied into the store.
        """
        self.collections: Dict[str, Dict[str, Dict]] = deepcopy(collections) if collections else {}

    def apply_writes(self, writes: List[BatchWrite]):
        """
        Apply a list of writes all together.

        Args:
            writes: Tuples of (operation, collection name, document key, fields).

        Raises:
            ValueError: If a write has an unknown operation. No write is applied.
        """
        staged = deepcopy(self.collections)
        for operation, name, key, fields in writes:
            documents = staged.setdefault(name, {})
            if operation == SET:
                documents[key] = deepcopy(fields)
            elif operation == MERGE:
                documents.setdefault(key, {}).update(deepcopy(fields))
            elif operation == DELETE:
                documents.pop(key, None)
            else:
                raise ValueError(f"Unknown write operation '{operation}'.")
        self.collections = staged
        LOG.debug(f"Applied {len(writes)} write(s) to the in-memory store.")

    async def stream(self, name: str) -> AsyncIterator[DocumentSnapshot]:
        for key, fields in list(self.collections.get(name, {}).items()):
            yield DocumentSnapshot(key, deepcopy(fields))

    async def get(self, name: str, key: str) -> Optional[DocumentSnapshot]:
        fields = self.collections.get(name, {}).get(key)
        if fields is None:
            return None
        return DocumentSnapshot(key, deepcopy(fields))

    async def set(self, name: str, key: str, fields: Mapping[str, Any]):
        self.apply_writes([(SET, name, key, dict(fields))])

    async def update(self, name: str, key: str, fields: Mapping[str, Any]):
        self.apply_writes([(MERGE, name, key, dict(fields))])

    async def delete(self, name: str, key: str):
        self.apply_writes([(DELETE, name, key, None)])

    def batch(self) -> MemoryBatch:
        return MemoryBatch(self)

    async def get_version(self) -> str:
        return f"memory {__version__}"
