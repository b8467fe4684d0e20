##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Items are the records that fill a group. Each item references its group by key.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from recordbase.common.enums import Collection
from recordbase.models.base import BaseRecord, DataclassFormatter, persisted
from recordbase.records.record_model import RecordModel


GROUP_FIELD = "groupId"


@dataclass
class Item(BaseRecord):
    """
    A single item.

    Attributes:
        name: The name of the item.
        group_id: The key of the group the item belongs to, if any.
        quantity: How many of the item there are.
    """

    name: str = ""
    group_id: Optional[str] = persisted(GROUP_FIELD, default=None)
    quantity: int = 0


class ItemFormatter(DataclassFormatter[Item]):
    """Formats list entries into `Item` records."""

    record_class = Item


class ItemModel(RecordModel[Item]):
    """
    The data model of the `items` collection.
    """

    collection_name = Collection.ITEMS
    formatter_class = ItemFormatter

    def group_of(self, item: Item, groups: Iterable[Any]) -> Optional[Dict[str, Any]]:
        """
        Look up the group of an item among already-loaded groups.

        Args:
            item: The item.
            groups: The loaded groups, as `Group` records or list entries.

        Returns:
            The group as `{"id": key, **fields}`, or None if the item has no group.

        Raises:
            ReferenceNotFoundError: If the item's group isn't among `groups`.
        """
        return self.resolve_referenced_entity(item.group_id, groups)

    def selected_group(self, item: Item, options: Iterable[Any]) -> Optional[str]:
        """
        Find which of the group options an item's group reference selects.

        Args:
            item: The item.
            options: The selectable groups.

        Returns:
            The key of the selected group, or None.
        """
        value = {"id": item.group_id} if item.group_id else None
        return self.select_matching_option(value, list(options))

    async def list_in_group(self, group_key: str) -> List[Item]:
        """
        Read the items that belong to a group.

        Args:
            group_key: The key of the group.

        Returns:
            The group's items, in the order the store returned them.
        """
        return [item for item in await self.list_all() if item.group_id == group_key]
