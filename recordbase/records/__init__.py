##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `records` package is the record access layer shared by every data model.

Modules:
    context: The `AccessContext` holding the store, auth provider, and signed-in user.
    fields: Reserved field names, edit cleaning, and geographic values.
    listing: `ListEntry`, `RecordFormatter`, and query result normalization.
    metadata: `Create`/`Update` write modes and metadata stamping.
    record_model: `RecordModel`, the base class of every data model.
    references: Resolving references between records.
"""

from recordbase.records.context import AccessContext
from recordbase.records.fields import clean_for_edit, derive_geo_point
from recordbase.records.listing import (
    ListEntry,
    RecordFormatter,
    format_all,
    normalize_query_result,
    normalize_query_stream,
)
from recordbase.records.metadata import Create, Update, WriteMode, compose_saved_record, stamp_metadata
from recordbase.records.record_model import RecordModel
from recordbase.records.references import resolve_referenced_entity, select_matching_option


__all__ = [
    "AccessContext",
    "Create",
    "ListEntry",
    "RecordFormatter",
    "RecordModel",
    "Update",
    "WriteMode",
    "clean_for_edit",
    "compose_saved_record",
    "derive_geo_point",
    "format_all",
    "normalize_query_result",
    "normalize_query_stream",
    "resolve_referenced_entity",
    "select_matching_option",
    "stamp_metadata",
]
