##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Store factory for selecting and instantiating document stores in Recordbase.

This module defines the `StoreFactory` class, which serves as an abstraction
layer for managing available store implementations. It supports dynamic selection
and instantiation of stores such as Redis, Firestore, or the in-memory store, based
on the `store` section of the configuration.

The factory maintains mappings of store names and aliases, and raises a clear error
if an unsupported store is requested.
"""

from typing import Any, Dict

from recordbase.abstracts import RecordbaseBaseFactory
from recordbase.backends.firestore.firestore_store import FirestoreDocumentStore
from recordbase.backends.memory.memory_store import MemoryDocumentStore
from recordbase.backends.redis.redis_store import RedisDocumentStore
from recordbase.backends.store_base import DocumentStore
from recordbase.exceptions import StoreNotSupportedError


class StoreFactory(RecordbaseBaseFactory):
    """
    Factory class for managing and instantiating supported document stores.

    Attributes:
        _registry (Dict[str, DocumentStore]): Maps canonical store names to store classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical store names.
        entry_point_group (str): The entry point group searched for store plugins.
        unsupported_error (Type[Exception]): `StoreNotSupportedError`.

    Methods:
        register: Register a new store class and optional aliases.
        list_available: Return a list of supported store names.
        create: Instantiate a store class by name or alias.
        create_from_settings: Instantiate a store from a `store` configuration section.
    """

    entry_point_group = "recordbase.stores"
    unsupported_error = StoreNotSupportedError

    def _register_builtins(self):
        """
        Register built-in store implementations.
        """
        self.register("redis", RedisDocumentStore, aliases=["rediss"])
        self.register("firestore", FirestoreDocumentStore)
        self.register("memory", MemoryDocumentStore, aliases=["local"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of DocumentStore.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass DocumentStore.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, DocumentStore):
            raise TypeError(f"{component_class} must inherit from DocumentStore")

    def create_from_settings(self, settings: Dict) -> DocumentStore:
        """
        Instantiate a store from the `store` section of a configuration.

        Args:
            settings: A dictionary with the store `name` and the keyword arguments of its class.

        Returns:
            An instance of the requested store.

        Raises:
            StoreNotSupportedError: If the settings don't name a supported store.
        """
        options = dict(settings)
        name = options.pop("name", None)
        if not name:
            raise StoreNotSupportedError("The store settings do not name a store.")
        return self.create(name, options or None)


store_factory = StoreFactory()
