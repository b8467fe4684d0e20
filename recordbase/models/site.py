##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Sites are physical locations, stored with a geographic coordinate pair.
"""

from dataclasses import dataclass
from typing import Any, Optional

from recordbase.common.enums import Collection
from recordbase.models.base import BaseRecord, DataclassFormatter
from recordbase.records.record_model import RecordModel


@dataclass
class Site(BaseRecord):
    """
    A physical location.

    Attributes:
        name: The name of the site.
        address: The postal address of the site.
        location: The coordinates of the site in the store's geographic type.
    """

    name: str = ""
    address: str = ""
    location: Optional[Any] = None


class SiteFormatter(DataclassFormatter[Site]):
    """Formats list entries into `Site` records."""

    record_class = Site


class SiteModel(RecordModel[Site]):
    """
    The data model of the `sites` collection.
    """

    collection_name = Collection.SITES
    formatter_class = SiteFormatter

    async def create_site(
        self, name: str, latitude: Optional[float] = None, longitude: Optional[float] = None, address: str = ""
    ) -> str:
        """
        Create a site. Missing coordinates are stored as 0.

        Args:
            name: The name of the site.
            latitude: Latitude in degrees.
            longitude: Longitude in degrees.
            address: The postal address of the site.

        Returns:
            The key of the new site.
        """
        site = Site(name=name, address=address, location=self.derive_geo_point(latitude, longitude))
        return await self.create(site.to_fields())

    async def relocate(self, key: str, latitude: Optional[float] = None, longitude: Optional[float] = None):
        """
        Move a site to new coordinates.

        Args:
            key: The key of the site.
            latitude: Latitude in degrees.
            longitude: Longitude in degrees.
        """
        await self.update(key, {"location": self.derive_geo_point(latitude, longitude)})
