##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The concrete data models built on `RecordModel`.

Modules:
    base: The dataclass base of the record types and its formatter.
    group: Groups, which can be created together with their items.
    item: Items, which reference a group.
    site: Sites, which carry a geographic location.
"""

from recordbase.models.base import BaseRecord, DataclassFormatter
from recordbase.models.group import Group, GroupFormatter, GroupModel
from recordbase.models.item import Item, ItemFormatter, ItemModel
from recordbase.models.site import Site, SiteFormatter, SiteModel


__all__ = [
    "BaseRecord",
    "DataclassFormatter",
    "Group",
    "GroupFormatter",
    "GroupModel",
    "Item",
    "ItemFormatter",
    "ItemModel",
    "Site",
    "SiteFormatter",
    "SiteModel",
]
