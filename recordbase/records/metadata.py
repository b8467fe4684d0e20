##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module derives the metadata Recordbase stamps onto every persisted record.

A write is either a create or an update, and the caller says which by passing a
`Create` or an `Update`. Creates carry the creation time and the author along
with the update time; updates only ever carry the update time, so a stored
record's authorship can't be overwritten by an edit.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from recordbase.auth.actor import Actor
from recordbase.records.fields import CREATED_AT, CREATED_BY, UPDATED_AT, strip_metadata
from recordbase.utils import now_ms


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Create:
    """
    Marks a write as the first persist of a record.

    Attributes:
        created_at: The creation time in milliseconds since the epoch. None means
            "now"; any other value, including 0, is used as given.
    """

    created_at: Optional[int] = None


@dataclass(frozen=True)
class Update:
    """
    Marks a write as an edit of an existing record.
    """


WriteMode = Union[Create, Update]


def stamp_metadata(mode: WriteMode, actor: Optional[Actor] = None) -> Dict[str, Any]:
    """
    Build the metadata fields for a write.

    Args:
        mode: `Create(...)` for the first persist of a record, `Update()` for an edit.
        actor: The signed-in user, recorded as the author of created records.

    Returns:
        `{createdAt, createdBy, updatedAt}` for a create and `{updatedAt}` for an update.
        `createdBy` is a fresh copy of the actor, or None when nobody is signed in.

    Raises:
        TypeError: If `mode` is neither a `Create` nor an `Update`.
    """
    now = now_ms()
    if isinstance(mode, Update):
        return {UPDATED_AT: now}
    if isinstance(mode, Create):
        return {
            CREATED_AT: now if mode.created_at is None else mode.created_at,
            CREATED_BY: actor.to_dict() if actor is not None else None,
            UPDATED_AT: now,
        }
    raise TypeError(f"Expected a Create or Update write mode but got {type(mode).__name__}.")


def compose_saved_record(
    base_fields: Mapping[str, Any], is_update: bool = False, actor: Optional[Actor] = None
) -> Dict[str, Any]:
    """
    Merge the caller's fields with the metadata for a write, producing the exact
    field set to persist. Metadata always wins over caller-supplied values of the
    same name, and the update path drops any creation metadata the caller passed.

    Args:
        base_fields: The fields of the record. Not modified.
        is_update: Whether the record already exists.
        actor: The signed-in user.

    Returns:
        A new dictionary ready to be written to the store.
    """
    if is_update:
        saved = strip_metadata(dict(base_fields))
        saved.update(stamp_metadata(Update()))
    else:
        saved = dict(base_fields)
        saved.update(stamp_metadata(Create(), actor))
    LOG.debug(f"Composed {'update' if is_update else 'create'} record with fields: {sorted(saved)}")
    return saved
