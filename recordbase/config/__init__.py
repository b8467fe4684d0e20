##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the connection settings for the document store and the
auth provider from an `app.yaml` file. The file holds one block of settings per
environment (e.g. development, staging, production) and names the environment to use.

Modules:
    config_filepaths.py: Constants for the locations searched for `app.yaml`.
    configfile.py: Locating, reading, and resolving the configuration file.
"""
from copy import deepcopy
from types import SimpleNamespace
from typing import Dict, List, Optional

from recordbase.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all Recordbase config settings for the
    selected environment in one place.

    Attributes:
        environment (str): The name of the environment these settings belong to.
        store (Optional[SimpleNamespace]): A namespace containing document store settings.
        auth (Optional[SimpleNamespace]): A namespace containing auth provider settings.

    Methods:
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
        get_store_settings: Return the store settings as a plain dictionary.
        get_auth_settings: Return the auth settings as a plain dictionary.
    """

    sections: List[str] = ["store", "auth"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with the resolved settings of one environment.

        Args:
            app_dict: A dictionary with an `environment` name and optional `store`
                and `auth` sections.
        """
        self.environment: str = app_dict.get("environment")
        self.store: Optional[SimpleNamespace] = None
        self.auth: Optional[SimpleNamespace] = None
        self._raw: Dict = deepcopy(app_dict)
        self.load_app_into_namespaces(app_dict)

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance. Secrets
        such as api keys are masked.

        Returns:
            A string containing the values of the `store` and `auth` attributes.
        """
        formatted_str = f"config ({self.environment}):"
        for name in self.sections:
            attr = getattr(self, name)
            if attr is None:
                formatted_str += f"\n  {name}:\n    None"
                continue
            items = (
                f"    {k}: {'******' if 'key' in k or 'password' in k else repr(v)}" for k, v in attr.__dict__.items()
            )
            formatted_str += f"\n  {name}:\n" + "\n".join(items)
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for section in self.sections:
            if app_dict.get(section) is not None:
                setattr(self, section, nested_dict_to_namespaces(app_dict[section]))

    def get_store_settings(self) -> Dict:
        """
        Get the store settings of this environment.

        Returns:
            A copy of the `store` section as a dictionary (empty if not configured).
        """
        return deepcopy(self._raw.get("store") or {})

    def get_auth_settings(self) -> Dict:
        """
        Get the auth settings of this environment.

        Returns:
            A copy of the `auth` section as a dictionary (empty if not configured).
        """
        return deepcopy(self._raw.get("auth") or {})
