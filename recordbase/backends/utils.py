##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for backends that store documents as flat string mappings.

Every field value is stored as JSON. Values JSON can't express natively are
written as single-key tagged objects so they can be restored on the way back:

- `GeoPoint` -> `{"__geopoint__": [latitude, longitude]}`
- `set` -> `{"__set__": [...]}`
- `datetime` -> `{"__datetime__": "<iso 8601>"}`
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Mapping

from recordbase.backends.store_base import GeoPoint


LOG = logging.getLogger(__name__)

GEOPOINT_TAG = "__geopoint__"
SET_TAG = "__set__"
DATETIME_TAG = "__datetime__"


def _encode_value(value: Any) -> Any:
    """
    `default` hook for `json.dumps` handling the types JSON can't express.

    Args:
        value: The value the JSON encoder couldn't serialize.

    Returns:
        A tagged, JSON serializable representation of `value`.

    Raises:
        TypeError: If `value` has no known representation.
    """
    if isinstance(value, GeoPoint):
        return {GEOPOINT_TAG: [value.latitude, value.longitude]}
    if isinstance(value, (set, frozenset)):
        return {SET_TAG: sorted(value, key=repr)}
    if isinstance(value, datetime):
        return {DATETIME_TAG: value.isoformat()}
    raise TypeError(f"Object of type {type(value).__name__} can't be stored in a document.")


def _decode_object(obj: Dict[str, Any]) -> Any:
    """
    `object_hook` for `json.loads` restoring the tagged objects of `_encode_value`.

    Args:
        obj: A decoded JSON object.

    Returns:
        The restored value, or `obj` itself if it isn't tagged.
    """
    if len(obj) != 1:
        return obj
    if GEOPOINT_TAG in obj:
        latitude, longitude = obj[GEOPOINT_TAG]
        return GeoPoint(latitude, longitude)
    if SET_TAG in obj:
        return set(obj[SET_TAG])
    if DATETIME_TAG in obj:
        return datetime.fromisoformat(obj[DATETIME_TAG])
    return obj


def serialize_fields(fields: Mapping[str, Any]) -> Dict[str, str]:
    """
    Convert a document's fields into a mapping of strings the database can store.

    Args:
        fields: The fields of a document.

    Returns:
        A dictionary with the same keys and JSON encoded values.
    """
    LOG.debug("Serializing document fields...")
    return {name: json.dumps(value, default=_encode_value) for name, value in fields.items()}


def deserialize_fields(data: Mapping[str, str]) -> Dict[str, Any]:
    """
    Convert data that was retrieved from the database back into a document's fields.

    Values that aren't valid JSON were written by something other than Recordbase;
    they're kept as the raw string.

    Args:
        data: The stored mapping of field names to JSON strings.

    Returns:
        The fields of the document.
    """
    LOG.debug("Deserializing document fields...")
    fields = {}
    for name, value in data.items():
        try:
            fields[name] = json.loads(value, object_hook=_decode_object)
        except json.JSONDecodeError:
            LOG.warning(f"Field '{name}' does not hold JSON; keeping the raw value.")
            fields[name] = value
    return fields
