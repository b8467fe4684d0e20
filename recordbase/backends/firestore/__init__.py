##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Firestore-based document store for Recordbase.

Modules:
    firestore_store: Implements the `DocumentStore` interface using the Firestore asyncio client.
"""
