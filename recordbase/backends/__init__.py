##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Document store infrastructure for Recordbase.

The `backends` package provides a unified interface and implementations for reading
and writing the documents behind Recordbase's records across various storage
technologies.

Subpackages:
    firestore: Firestore implementation using the asyncio client library.
    memory: Process-local implementation used for local mode.
    redis: Redis implementation using `redis.asyncio`.

Modules:
    backend_factory: Contains `StoreFactory`, used to dynamically select and instantiate a store.
    store_base: Defines the abstract `DocumentStore` and `BatchBase` classes and the shared value types.
    utils: Serialization of document fields for stores that only hold strings.
"""
