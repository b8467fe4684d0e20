##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Names of the reserved record fields and the helpers that prepare raw field
values for the store or for editing.
"""

from typing import Any, Dict, List, MutableMapping, Optional

from recordbase.backends.store_base import DocumentStore


ID_FIELD: str = "id"
CREATED_AT: str = "createdAt"
CREATED_BY: str = "createdBy"
UPDATED_AT: str = "updatedAt"

METADATA_FIELDS: List[str] = [CREATED_AT, CREATED_BY, UPDATED_AT]
EDIT_STRIPPED_FIELDS: List[str] = [ID_FIELD, CREATED_AT, UPDATED_AT]


def clean_for_edit(record: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Strip the identifier and both timestamps from a record before it's handed
    back to an edit form. The record is modified in place; `createdBy` is kept.

    Args:
        record: The record to clean.

    Returns:
        The same mapping that was passed in.
    """
    for name in EDIT_STRIPPED_FIELDS:
        record.pop(name, None)
    return record


def derive_geo_point(store: DocumentStore, latitude: Optional[float] = None, longitude: Optional[float] = None) -> Any:
    """
    Build a coordinate pair in the store's native geographic type. Each missing
    coordinate defaults to 0. Ranges are not validated.

    Args:
        store: The store whose geographic type should be used.
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.

    Returns:
        An immutable coordinate pair.
    """
    return store.geo_point(latitude or 0, longitude or 0)


def strip_metadata(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Copy a field mapping without any of the metadata fields.

    Args:
        fields: The fields to copy.

    Returns:
        A new dictionary holding every non-metadata field.
    """
    return {name: value for name, value in fields.items() if name not in METADATA_FIELDS}
