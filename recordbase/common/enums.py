##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""This module provides enumerations shared across Recordbase."""
from enum import Enum


__all__ = ("Collection",)


class Collection(str, Enum):
    """
    Enum for the standard collection names used by the application's data models.

    Members subclass `str` so they can be handed to any store call that
    expects a collection name.

    Attributes:
        GROUPS (str): Item groups. Value: "groups".
        ITEMS (str): Inventory items. Value: "items".
        SITES (str): Physical sites. Value: "sites".
        WAREHOUSES (str): Warehouses belonging to sites. Value: "warehouses".
        SETTINGS (str): Application settings. Value: "settings".
        ATTRIBUTES (str): Custom item attributes. Value: "attributes".
    """

    GROUPS = "groups"
    ITEMS = "items"
    SITES = "sites"
    WAREHOUSES = "warehouses"
    SETTINGS = "settings"
    ATTRIBUTES = "attributes"

    def __str__(self) -> str:
        return self.value
