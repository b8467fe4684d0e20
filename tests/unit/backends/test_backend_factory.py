##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `backend_factory.py` module.
"""

import pytest
from pytest_mock import MockerFixture

from recordbase.backends.backend_factory import StoreFactory
from recordbase.backends.memory.memory_store import MemoryDocumentStore
from recordbase.backends.store_base import DocumentStore
from recordbase.exceptions import StoreNotSupportedError


class DummyRedisStore(MemoryDocumentStore):
    def __init__(self, *args, **kwargs):
        super().__init__()
        self.options = kwargs


class DummyFirestoreStore(MemoryDocumentStore):
    def __init__(self, *args, **kwargs):
        super().__init__()
        self.options = kwargs


class TestStoreFactory:
    """
    Test suite for the `StoreFactory`.

    This class tests that the store factory correctly registers, resolves, instantiates,
    and reports supported document stores. The network backed stores are replaced with
    dummies so no connection is attempted.
    """

    @pytest.fixture
    def store_factory(self, mocker: MockerFixture) -> StoreFactory:
        """
        An instance of the `StoreFactory` class. Resets on each test.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            An instance of the `StoreFactory` class for testing.
        """
        mocker.patch("recordbase.backends.backend_factory.RedisDocumentStore", DummyRedisStore)
        mocker.patch("recordbase.backends.backend_factory.FirestoreDocumentStore", DummyFirestoreStore)
        mocker.patch("recordbase.abstracts.factory.entry_points", return_value=[])
        return StoreFactory()

    def test_list_available_stores(self, store_factory: StoreFactory):
        """
        Test that `list_available` returns the built-in stores.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """
        assert set(store_factory.list_available()) == {"redis", "firestore", "memory"}

    @pytest.mark.parametrize(
        "store_type, expected_cls",
        [
            ("redis", DummyRedisStore),
            ("rediss", DummyRedisStore),
            ("firestore", DummyFirestoreStore),
            ("memory", MemoryDocumentStore),
            ("local", MemoryDocumentStore),
        ],
    )
    def test_create_valid_store(self, store_factory: StoreFactory, store_type: str, expected_cls: DocumentStore):
        """
        Test that `create` resolves names and aliases to store instances.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
            store_type: The name or alias of the store to create.
            expected_cls: The class that we're expecting `store_factory` to create.
        """
        assert isinstance(store_factory.create(store_type), expected_cls)

    def test_create_invalid_store_raises(self, store_factory: StoreFactory):
        """
        Test that `create` raises `StoreNotSupportedError` for unknown stores.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """
        with pytest.raises(StoreNotSupportedError, match="mongodb"):
            store_factory.create("mongodb")

    def test_invalid_registration_type_error(self, store_factory: StoreFactory):
        """
        Test that trying to register a non-DocumentStore raises TypeError.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """

        class NotAStore:
            pass

        with pytest.raises(TypeError, match="must inherit from DocumentStore"):
            store_factory.register("fake", NotAStore)

    def test_create_from_settings(self, store_factory: StoreFactory):
        """
        Test that the `store` settings section selects the store and supplies its options.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """
        settings = {"name": "redis", "url": "redis://db:6379/1", "key_prefix": "app:"}
        store = store_factory.create_from_settings(settings)
        assert isinstance(store, DummyRedisStore)
        assert store.options == {"url": "redis://db:6379/1", "key_prefix": "app:"}
        assert settings["name"] == "redis"

    def test_create_from_settings_without_options(self, store_factory: StoreFactory):
        """
        Test that settings with only a name create the store with its defaults.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """
        assert isinstance(store_factory.create_from_settings({"name": "memory"}), MemoryDocumentStore)

    def test_create_from_settings_without_name(self, store_factory: StoreFactory):
        """
        Test that settings without a store name are rejected.

        Args:
            store_factory: An instance of the `StoreFactory` class for testing.
        """
        with pytest.raises(StoreNotSupportedError, match="do not name a store"):
            store_factory.create_from_settings({"url": "redis://db"})
