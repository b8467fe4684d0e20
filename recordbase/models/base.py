##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module houses the dataclass base shared by the record types of the
concrete models, and the formatter that builds them from list entries.
"""

from dataclasses import Field, dataclass, field
from dataclasses import fields as dataclass_fields
from typing import Any, Dict, List, Optional, Type, TypeVar

from recordbase.records.fields import CREATED_AT, CREATED_BY, ID_FIELD, UPDATED_AT
from recordbase.records.listing import ListEntry, RecordFormatter


R = TypeVar("R", bound="BaseRecord")

# Dataclass attribute -> reserved field of the record
RESERVED_ATTRIBUTES: Dict[str, str] = {
    "id": ID_FIELD,
    "created_at": CREATED_AT,
    "created_by": CREATED_BY,
    "updated_at": UPDATED_AT,
}


def persisted(name: str, **kwargs) -> Field:
    """
    Declare a dataclass field that is stored under a different name.

    Args:
        name: The name of the field in the store.
        **kwargs: Any other arguments of `dataclasses.field`.

    Returns:
        The dataclass field.
    """
    return field(metadata={"persisted": name}, **kwargs)


@dataclass
class BaseRecord:
    """
    A base class for the record types of the concrete models.

    Attributes:
        id: The key of the record; None until it has been stored.
        created_at: Creation time in milliseconds since the epoch.
        created_by: Snapshot of the user who created the record.
        updated_at: Time of the last write in milliseconds since the epoch.

    Methods:
        to_fields: Get the fields the caller owns, keyed by their stored names.
        to_record: Get the id, fields, and metadata as one mapping.
        from_entry (classmethod): Build a record from a list entry.
    """

    id: Optional[str] = None  # pylint: disable=C0103
    created_at: Optional[int] = None
    created_by: Optional[Dict[str, Any]] = None
    updated_at: Optional[int] = None

    @classmethod
    def _data_fields(cls) -> List[Field]:
        return [f for f in dataclass_fields(cls) if f.name not in RESERVED_ATTRIBUTES]

    def to_fields(self) -> Dict[str, Any]:
        """
        Get the fields the caller owns. The id and metadata are left out since the
        access layer manages them.

        Returns:
            A dictionary keyed by the names the fields are stored under.
        """
        return {f.metadata.get("persisted", f.name): getattr(self, f.name) for f in self._data_fields()}

    def to_record(self) -> Dict[str, Any]:
        """
        Flatten the record into the mapping it was read from: its `id`, its fields,
        and whichever metadata fields are set.

        Returns:
            A new dictionary keyed by the stored field names.
        """
        record = {ID_FIELD: self.id, **self.to_fields()}
        for attribute, name in RESERVED_ATTRIBUTES.items():
            value = getattr(self, attribute)
            if name != ID_FIELD and value is not None:
                record[name] = value
        return record

    @classmethod
    def from_entry(cls: Type[R], entry: ListEntry) -> R:
        """
        Build a record from a list entry. Stored fields the record type doesn't
        declare are ignored.

        Args:
            entry: The entry to convert.

        Returns:
            A new record.
        """
        values = {attribute: entry.data.get(name) for attribute, name in RESERVED_ATTRIBUTES.items()}
        values["id"] = entry.key
        for f in cls._data_fields():
            name = f.metadata.get("persisted", f.name)
            if name in entry.data:
                values[f.name] = entry.data[name]
        return cls(**values)


class DataclassFormatter(RecordFormatter[R]):
    """
    Formats list entries into a `BaseRecord` subclass.

    Attributes:
        record_class: The record type to build.
    """

    record_class: Type[R] = None

    def format(self, entry: ListEntry) -> R:
        return self.record_class.from_entry(entry)
