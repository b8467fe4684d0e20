##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Groups organize items. A group and its first items are usually created together,
so `GroupModel` creates them in one batch.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple

from recordbase.common.enums import Collection
from recordbase.models.base import BaseRecord, DataclassFormatter
from recordbase.models.item import GROUP_FIELD
from recordbase.records.record_model import RecordModel


LOG = logging.getLogger(__name__)


@dataclass
class Group(BaseRecord):
    """
    A named group of items.

    Attributes:
        name: The name of the group.
        description: A free-form description.
    """

    name: str = ""
    description: str = ""


class GroupFormatter(DataclassFormatter[Group]):
    """Formats list entries into `Group` records."""

    record_class = Group


class GroupModel(RecordModel[Group]):
    """
    The data model of the `groups` collection.
    """

    collection_name = Collection.GROUPS
    formatter_class = GroupFormatter

    async def create_with_items(
        self, group_fields: Mapping[str, Any], items: Iterable[Mapping[str, Any]] = ()
    ) -> Tuple[str, List[str]]:
        """
        Create a group together with its items. Either every record is created or,
        if the store rejects the batch, none are.

        Args:
            group_fields: The fields of the group.
            items: The fields of each item. Their group reference is filled in.

        Returns:
            The key of the group and the keys of the items, in order.

        Raises:
            BatchCommitError: If the store rejected the batch.
        """
        batch = self.begin_batch()
        group_key = self.stage_create(batch, fields=group_fields)
        item_keys = [
            self.stage_create(batch, Collection.ITEMS, {**item, GROUP_FIELD: group_key}) for item in items
        ]
        await self.commit_batch(batch)
        LOG.info(f"Created group '{group_key}' with {len(item_keys)} item(s).")
        return group_key, item_keys
