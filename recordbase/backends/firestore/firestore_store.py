##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Firestore implementation of the `DocumentStore` interface.

This store hands out the client library's own references and snapshots, so the
handles returned by `collection`/`document` are `AsyncCollectionReference` and
`AsyncDocumentReference` objects and the geographic type is Firestore's `GeoPoint`.
Batches wrap Firestore's `AsyncWriteBatch`, which the server commits atomically.
"""

import logging
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from google.cloud import firestore

from recordbase.backends.store_base import BatchBase, DocumentStore


LOG = logging.getLogger(__name__)


class FirestoreBatch(BatchBase):
    """
    A batch of writes accumulated on a Firestore `AsyncWriteBatch`.

    Attributes:
        write_batch (firestore.AsyncWriteBatch): The client library batch.
    """

    def __init__(self, write_batch: firestore.AsyncWriteBatch):
        super().__init__()
        self.write_batch: firestore.AsyncWriteBatch = write_batch

    def _stage_set(self, handle: firestore.AsyncDocumentReference, fields: Dict[str, Any]):
        self.write_batch.set(handle, fields)

    async def _commit(self):
        LOG.debug(f"Committing Firestore batch with {len(self)} staged write(s)...")
        await self.write_batch.commit()


class FirestoreDocumentStore(DocumentStore):
    """
    A Firestore-based document store.

    Attributes:
        client (firestore.AsyncClient): The asyncio Firestore client.
        collection_prefix (str): A prefix added to every collection name.
    """

    store_name = "firestore"

    def __init__(
        self,
        project_id: Optional[str] = None,
        database: Optional[str] = None,
        collection_prefix: str = "",
        client: Optional[firestore.AsyncClient] = None,
    ):
        """
        Initialize the store. Credentials are resolved from the environment
        (e.g. `GOOGLE_APPLICATION_CREDENTIALS`) by the client library.

        Args:
            project_id: The Google Cloud project holding the database.
            database: The Firestore database id; the default database when omitted.
            collection_prefix: A prefix added to every collection name.
            client: An existing client to use instead of creating one.
        """
        if client is None:
            client = firestore.AsyncClient(project=project_id, database=database)
        self.client: firestore.AsyncClient = client
        self.collection_prefix: str = collection_prefix

    def collection(self, name: str) -> firestore.AsyncCollectionReference:
        return self.client.collection(f"{self.collection_prefix}{name}")

    def document(self, name: str, key: str) -> firestore.AsyncDocumentReference:
        return self.collection(name).document(key)

    def new_document(self, name: str) -> firestore.AsyncDocumentReference:
        # Firestore allocates the auto id client side without a round trip
        return self.collection(name).document()

    def geo_point(self, latitude: float, longitude: float) -> firestore.GeoPoint:
        return firestore.GeoPoint(latitude, longitude)

    async def stream(self, name: str) -> AsyncIterator[firestore.DocumentSnapshot]:
        LOG.debug(f"Streaming documents of collection '{name}' from Firestore...")
        async for snapshot in self.collection(name).stream():
            yield snapshot

    async def get(self, name: str, key: str) -> Optional[firestore.DocumentSnapshot]:
        LOG.debug(f"Retrieving document '{key}' of collection '{name}' from Firestore.")
        snapshot = await self.document(name, key).get()
        return snapshot if snapshot.exists else None

    async def set(self, name: str, key: str, fields: Mapping[str, Any]):
        LOG.debug(f"Setting document '{key}' of collection '{name}' in Firestore...")
        await self.document(name, key).set(dict(fields))

    async def update(self, name: str, key: str, fields: Mapping[str, Any]):
        LOG.debug(f"Updating document '{key}' of collection '{name}' in Firestore...")
        await self.document(name, key).set(dict(fields), merge=True)

    async def delete(self, name: str, key: str):
        LOG.debug(f"Deleting document '{key}' of collection '{name}' from Firestore...")
        await self.document(name, key).delete()

    def batch(self) -> FirestoreBatch:
        return FirestoreBatch(self.client.batch())

    async def get_version(self) -> str:
        """
        Firestore is a managed service without a queryable server version, so
        report the version of the client library instead.

        Returns:
            The version of `google-cloud-firestore`.
        """
        return f"google-cloud-firestore {firestore.__version__}"
