##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `enums.py` module.
"""

from recordbase.common.enums import Collection


def test_collection_values():
    """
    Test the collection names used by the data models.
    """
    assert [member.value for member in Collection] == [
        "groups",
        "items",
        "sites",
        "warehouses",
        "settings",
        "attributes",
    ]


def test_collection_behaves_as_string():
    """
    Test that members can be used anywhere a collection name string is expected.
    """
    assert Collection.ITEMS == "items"
    assert str(Collection.SITES) == "sites"
    assert f"{Collection.GROUPS}/abc" == "groups/abc"
    assert Collection("warehouses") is Collection.WAREHOUSES
