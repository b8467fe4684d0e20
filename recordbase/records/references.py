##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Helpers for records that point at other records by key, such as an item that
belongs to a group. Both work against lists that have already been loaded.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from recordbase.exceptions import ReferenceNotFoundError
from recordbase.records.fields import ID_FIELD


def _option_id(option: Any) -> Optional[str]:
    """
    Read the key of a list entry, a mapping with an `id` key, or an object
    with an `id` attribute.
    """
    if option is None:
        return None
    if isinstance(option, Mapping):
        return option.get(ID_FIELD)
    return getattr(option, ID_FIELD, None)


def _candidate_record(candidate: Any) -> Dict[str, Any]:
    """
    Read the fields of a loaded record: a list entry, a formatted record with a
    `to_record` method, or a mapping.
    """
    if isinstance(candidate, Mapping):
        return dict(candidate)
    to_record = getattr(candidate, "to_record", None)
    if to_record is None:
        raise TypeError(f"Can't read the fields of a {type(candidate).__name__}.")
    return to_record()


def resolve_referenced_entity(key: Optional[str], candidates: Iterable[Any]) -> Optional[Dict[str, Any]]:
    """
    Look up the record a reference points at.

    Args:
        key: The key held by the reference. Empty or None means "no reference".
        candidates: The already-loaded records to search. Each may be a list entry,
            a formatted record such as the output of a model's `list_all`, or a
            mapping with an `id` key.

    Returns:
        None when `key` is empty, otherwise `{"id": key, **data}` of the matching record.

    Raises:
        ReferenceNotFoundError: If no candidate has the key.
    """
    if not key:
        return None

    for candidate in candidates:
        if _option_id(candidate) == key:
            record = _candidate_record(candidate)
            record.pop(ID_FIELD, None)
            return {ID_FIELD: key, **record}
    raise ReferenceNotFoundError(key)


def select_matching_option(value: Any, options: Optional[Iterable[Any]]) -> Optional[str]:
    """
    Find the option that a stored reference selects, e.g. to preselect a dropdown.

    Args:
        value: The stored reference: a list entry or anything with an `id`.
        options: The selectable options.

    Returns:
        The id of the first option whose id equals the id of `value`, or None if
        either input is empty or nothing matches.
    """
    if not options or not value:
        return None

    wanted = _option_id(value)
    for option in options:
        option_id = _option_id(option)
        if option_id == wanted:
            return option_id
    return None
