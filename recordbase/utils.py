##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module for Recordbase utility functions.
"""

import logging
import secrets
import string
import time
from types import SimpleNamespace
from typing import Dict

import yaml


LOG = logging.getLogger(__name__)

AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Each key in the dictionary becomes an attribute of a SimpleNamespace, allowing
    for attribute-style access to the data. The input dictionary is not modified.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """
    if not isinstance(dic, dict):
        raise TypeError(f"Expected a dict but got {type(dic).__name__}.")

    def recurse(value):
        if not isinstance(value, dict):
            return value
        return SimpleNamespace(**{key: recurse(val) for key, val in value.items()})

    return recurse(dic)


def now_ms() -> int:
    """
    Get the current time as milliseconds since the epoch.

    Returns:
        The current time in milliseconds.
    """
    return int(time.time() * 1000)


def generate_auto_id() -> str:
    """
    Generate an opaque document key in the same shape as Firestore's auto ids:
    20 random alphanumeric characters.

    Returns:
        A new random key.
    """
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))
