##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module turns the snapshots a store returns for a query into plain, ordered
lists, and lets concrete models format those lists into their own record types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncIterable, Dict, Generic, Iterable, List, TypeVar

from recordbase.records.fields import ID_FIELD


T = TypeVar("T")


@dataclass(frozen=True)
class ListEntry:
    """
    One row of a query result.

    Attributes:
        key: The opaque key of the record.
        data: The record's fields exactly as the store returned them.
    """

    key: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:  # pylint: disable=C0103
        """The opaque key of the record; an alias of `key`."""
        return self.key

    def to_record(self) -> Dict[str, Any]:
        """
        Flatten the entry into a single mapping.

        Returns:
            A new dictionary holding the fields of the entry plus its `id`.
        """
        return {ID_FIELD: self.key, **self.data}


class RecordFormatter(ABC, Generic[T]):
    """
    Converts list entries into the record type of a concrete model.

    Methods:
        format: Convert one entry.
    """

    @abstractmethod
    def format(self, entry: ListEntry) -> T:
        """
        Convert one list entry.

        Args:
            entry: The entry to convert.

        Returns:
            The formatted record.
        """
        raise NotImplementedError("Subclasses of `RecordFormatter` must implement a `format` method.")


def _to_entry(snapshot: Any) -> ListEntry:
    return ListEntry(snapshot.id, snapshot.to_dict() or {})


def normalize_query_result(snapshots: Iterable[Any]) -> List[ListEntry]:
    """
    Consume a query result into a list with one entry per row, in iteration order.

    Args:
        snapshots: A finite, single-pass iterable of snapshots, each with an `id`
            and a `to_dict()` method.

    Returns:
        The rows as `ListEntry` objects.
    """
    return [_to_entry(snapshot) for snapshot in snapshots]


async def normalize_query_stream(snapshots: AsyncIterable[Any]) -> List[ListEntry]:
    """
    Consume a streamed query result into a list with one entry per row, in the
    order the store yields them.

    Args:
        snapshots: A finite, single-pass async iterable of snapshots.

    Returns:
        The rows as `ListEntry` objects.
    """
    return [_to_entry(snapshot) async for snapshot in snapshots]


def format_all(raw_list: Iterable[ListEntry], formatter: RecordFormatter[T]) -> List[T]:
    """
    Format every entry of a normalized list, preserving order.

    Args:
        raw_list: The entries to format.
        formatter: The formatter of the concrete model.

    Returns:
        The formatted records.
    """
    return [formatter.format(entry) for entry in raw_list]
