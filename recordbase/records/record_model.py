##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `RecordModel`, the base class of every data model in Recordbase.

A model is bound to one collection and one `AccessContext`. It resolves handles,
stamps records with creation and update metadata, normalizes query results into
ordered lists and formats them with the model's `RecordFormatter`, and groups
creates into atomic batches.
"""

import logging
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from recordbase.backends.store_base import BatchBase
from recordbase.exceptions import AuthOperationError, NotConfiguredError
from recordbase.records import fields as record_fields
from recordbase.records import listing, metadata, references
from recordbase.records.context import AccessContext
from recordbase.records.listing import ListEntry, RecordFormatter
from recordbase.records.metadata import Create, WriteMode


LOG = logging.getLogger(__name__)
T = TypeVar("T")


class RecordModel(Generic[T]):
    """
    Base class for the data models of an application.

    Subclasses set `collection_name` and `formatter_class`; everything else is shared.

    Attributes:
        collection_name (str): The collection the model's records live in.
        formatter_class (Type[RecordFormatter]): The formatter used when none is passed in.
        context (AccessContext): The shared connection state.
        formatter (RecordFormatter): Converts list entries into the model's record type.

    Methods:
        is_configured: Whether a store is connected.
        resolve_handle: Get a collection or document handle.
        push_key: Get the key of a document handle.
        derive_geo_point: Build a coordinate pair in the store's geographic type.
        stamp_metadata: Build the metadata of a create or update.
        compose_saved_record: Merge fields with the metadata of a write.
        clean_for_edit: Strip the id and timestamps from a record.
        normalize_query_result: Turn a query result into a list of entries.
        format_all: Format a list of entries with the model's formatter.
        resolve_referenced_entity: Look up the record a reference points at.
        select_matching_option: Find the option a reference selects.
        user_data: Get the contact details of the signed-in user.
        send_password_reset: Send a password reset message.
        begin_batch: Start a batch.
        stage_create: Stage the creation of a record in a batch.
        commit_batch: Commit a batch.
        list_all: Read and format every record of the collection.
        get: Read and format one record.
        create: Create one record.
        update: Update one record.
        delete: Delete one record.
    """

    collection_name: str = None
    formatter_class: Type[RecordFormatter] = None

    def __init__(self, context: AccessContext, formatter: Optional[RecordFormatter[T]] = None):
        """
        Bind the model to a context.

        Args:
            context: The shared connection state.
            formatter: The formatter to use instead of an instance of `formatter_class`.

        Raises:
            ValueError: If the model has no formatter.
        """
        if formatter is None and self.formatter_class is None:
            raise ValueError(f"{type(self).__name__} needs a formatter or a `formatter_class`.")
        self.context: AccessContext = context
        self.formatter: RecordFormatter[T] = formatter if formatter is not None else self.formatter_class()

    def _collection(self, collection_name: Optional[str]) -> str:
        name = self.collection_name if collection_name is None else collection_name
        if not name:
            raise ValueError("A collection name is required.")
        return str(name)

    def is_configured(self) -> bool:
        """
        Check whether a store is connected.

        Returns:
            True if the model's context has a store.
        """
        return self.context.store is not None

    def resolve_handle(self, collection_name: Optional[str] = None, key: Optional[str] = None) -> Any:
        """
        Get a handle to a collection or, when a key is given, to one of its documents.
        Nothing is read or written.

        Args:
            collection_name: The collection; the model's own collection when omitted.
            key: The key of a document. An empty key means the collection itself.

        Returns:
            A collection handle when `key` is omitted or empty, otherwise a document handle.

        Raises:
            NotConfiguredError: If no store is connected.
            ValueError: If there is no collection name.
        """
        store = self.context.require_store()
        name = self._collection(collection_name)
        if not key:
            return store.collection(name)
        return store.document(name, key)

    @staticmethod
    def push_key(handle: Any) -> str:
        """
        Get the opaque key of a document handle.

        Args:
            handle: A document handle.

        Returns:
            The key of the document.
        """
        return handle.id

    def derive_geo_point(self, latitude: Optional[float] = None, longitude: Optional[float] = None) -> Any:
        """
        Build a coordinate pair in the store's geographic type. See
        `recordbase.records.fields.derive_geo_point`.
        """
        return record_fields.derive_geo_point(self.context.require_store(), latitude, longitude)

    def stamp_metadata(self, mode: WriteMode) -> Dict[str, Any]:
        """
        Build the metadata of a write, authored by the context's actor. See
        `recordbase.records.metadata.stamp_metadata`.
        """
        return metadata.stamp_metadata(mode, self.context.actor)

    def compose_saved_record(self, base_fields: Mapping[str, Any], is_update: bool = False) -> Dict[str, Any]:
        """
        Merge fields with the metadata of a write. See
        `recordbase.records.metadata.compose_saved_record`.
        """
        return metadata.compose_saved_record(base_fields, is_update=is_update, actor=self.context.actor)

    clean_for_edit = staticmethod(record_fields.clean_for_edit)
    normalize_query_result = staticmethod(listing.normalize_query_result)
    resolve_referenced_entity = staticmethod(references.resolve_referenced_entity)
    select_matching_option = staticmethod(references.select_matching_option)

    def format_all(self, raw_list: Iterable[ListEntry]) -> List[T]:
        """
        Format every entry of a list with the model's formatter, preserving order.

        Args:
            raw_list: The entries to format.

        Returns:
            The formatted records.
        """
        return listing.format_all(raw_list, self.formatter)

    def user_data(self) -> Dict[str, Any]:
        """
        Get the contact details of the signed-in user.

        Returns:
            A dictionary with the user's `email`, `displayName` (empty if unset), and `userId`.

        Raises:
            NotConfiguredError: If nobody was signed in when the context was built.
        """
        actor = self.context.actor
        if actor is None:
            raise NotConfiguredError("Nobody is signed in.")
        return {"email": actor.email, "displayName": actor.display_name or "", "userId": actor.uid}

    async def send_password_reset(self, email: str):
        """
        Ask the auth provider to send a password reset message. A failure is shown
        to the user through the notifier before it's raised.

        Args:
            email: The address to send the message to.

        Raises:
            NotConfiguredError: If auth isn't configured.
            AuthOperationError: If the provider failed to send the message.
        """
        auth = self.context.require_auth()
        try:
            await auth.send_password_reset(email)
        except AuthOperationError as exc:
            self.context.notifier.display(str(exc))
            raise
        except Exception as exc:  # pylint: disable=broad-except
            self.context.notifier.display(str(exc))
            raise AuthOperationError(str(exc)) from exc

    def begin_batch(self) -> BatchBase:
        """
        Start a new, empty batch. Nothing is written until it's committed.

        Returns:
            The batch.

        Raises:
            NotConfiguredError: If no store is connected.
        """
        return self.context.require_store().batch()

    def stage_create(
        self, batch: BatchBase, collection_name: Optional[str] = None, fields: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Stage the creation of a record in a batch under a freshly allocated key.

        Args:
            batch: The batch to stage the write in.
            collection_name: The collection; the model's own collection when omitted.
            fields: The fields of the new record.

        Returns:
            The key of the new record.

        Raises:
            NotConfiguredError: If no store is connected.
            BatchCommitError: If the batch has already been committed.
        """
        store = self.context.require_store()
        name = self._collection(collection_name)
        handle = store.new_document(name)
        batch.set(handle, self.compose_saved_record(fields or {}))
        key = self.push_key(handle)
        LOG.debug(f"Staged creation of '{key}' in collection '{name}'.")
        return key

    async def commit_batch(self, batch: BatchBase):
        """
        Commit every write staged in a batch, all or nothing.

        Args:
            batch: The batch to commit.

        Raises:
            BatchCommitError: If the store rejected the batch or it was already committed.
        """
        staged = len(batch)
        await batch.commit()
        LOG.info(f"Committed batch of {staged} write(s).")

    async def list_all(self) -> List[T]:
        """
        Read every record of the model's collection.

        Returns:
            The formatted records, in the order the store returned them.
        """
        store = self.context.require_store()
        entries = await listing.normalize_query_stream(store.stream(self._collection(None)))
        return self.format_all(entries)

    async def get(self, key: str) -> Optional[T]:
        """
        Read one record of the model's collection.

        Args:
            key: The key of the record.

        Returns:
            The formatted record, or None if it doesn't exist.
        """
        snapshot = await self.context.require_store().get(self._collection(None), key)
        if snapshot is None:
            return None
        return self.formatter.format(ListEntry(snapshot.id, snapshot.to_dict() or {}))

    async def create(self, fields: Optional[Mapping[str, Any]] = None, mode: Optional[Create] = None) -> str:
        """
        Create one record in the model's collection under a freshly allocated key.

        Args:
            fields: The fields of the new record.
            mode: A `Create` carrying an existing creation time, e.g. when importing records.

        Returns:
            The key of the new record.
        """
        store = self.context.require_store()
        name = self._collection(None)
        key = self.push_key(store.new_document(name))
        saved = dict(fields or {})
        saved.update(self.stamp_metadata(mode or Create()))
        await store.set(name, key, saved)
        LOG.debug(f"Created '{key}' in collection '{name}'.")
        return key

    async def update(self, key: str, fields: Mapping[str, Any]):
        """
        Merge fields into one record of the model's collection. Creation metadata is
        never overwritten.

        Args:
            key: The key of the record.
            fields: The fields to change.
        """
        name = self._collection(None)
        await self.context.require_store().update(name, key, self.compose_saved_record(fields, is_update=True))
        LOG.debug(f"Updated '{key}' in collection '{name}'.")

    async def delete(self, key: str):
        """
        Delete one record of the model's collection.

        Args:
            key: The key of the record.
        """
        name = self._collection(None)
        await self.context.require_store().delete(name, key)
        LOG.debug(f"Deleted '{key}' from collection '{name}'.")
