##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from recordbase.auth.actor import Actor
from tests.fixture_types import FixtureDict


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture
def user_mapping() -> FixtureDict[str, object]:
    """
    A signed-in user in the shape the auth provider reports it.

    Returns:
        A dictionary of the user's identity fields.
    """
    return {
        "uid": "user-123",
        "displayName": "Ada Lovelace",
        "email": "ada@example.com",
        "emailVerified": True,
        "isAnonymous": False,
        "phoneNumber": None,
        "photoURL": "https://example.com/ada.png",
        "providerData": [{"providerId": "password", "uid": "ada@example.com"}],
    }


@pytest.fixture
def actor(user_mapping: FixtureDict[str, object]) -> Actor:
    """
    The `Actor` snapshot of `user_mapping`.

    Args:
        user_mapping: A signed-in user in the shape the auth provider reports it.

    Returns:
        An `Actor` instance.
    """
    return Actor.from_user(user_mapping)
