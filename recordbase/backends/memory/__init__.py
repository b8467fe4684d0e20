##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
In-memory document store for Recordbase's local mode.

Modules:
    memory_store: Implements the `DocumentStore` interface with process-local dictionaries.
"""
