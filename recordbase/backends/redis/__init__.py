##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis-based document store for Recordbase.

Modules:
    redis_store: Implements the `DocumentStore` interface using Redis hashes and sorted sets.
"""
