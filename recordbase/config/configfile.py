##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module provides functionality for locating and loading the application
configuration file, selecting the active environment from it, and applying
default settings.

An `app.yaml` file looks like this:

    environment: development
    environments:
      development:
        store:
          name: redis
          url: redis://localhost:6379/0
        auth:
          api_key: <web api key>
          project_id: my-project
      production:
        store:
          name: firestore
          project_id: my-project

The `RECORDBASE_ENV` environment variable overrides the `environment` entry.
"""
import logging
import os
from typing import Dict, Optional

from recordbase.config import Config
from recordbase.config.config_filepaths import APP_FILENAME, CONFIG_PATH_FILE, ENVIRONMENT_VAR, RECORDBASE_HOME
from recordbase.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT: str = "development"
LOCAL_ENVIRONMENT: str = "local"


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a Recordbase YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the Recordbase application configuration file (`app.yaml`).

    If no directory is provided, uses a fallback sequence:
      1. Check for `app.yaml` in the current working directory.
      2. Check if `CONFIG_PATH_FILE` exists and points to a valid config file.
      3. Check for `app.yaml` in the `RECORDBASE_HOME` directory.

    If a `path` is explicitly provided, the function checks only that directory
    for `app.yaml`.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        if os.path.isfile(CONFIG_PATH_FILE):
            with open(CONFIG_PATH_FILE, "r") as f:
                config_path = f.read().strip()
            if os.path.isfile(config_path):
                return config_path

        path_app = os.path.join(RECORDBASE_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates a minimal default configuration for local mode. Local mode keeps every
    record in process memory and has no auth provider.

    Returns:
        A resolved configuration dictionary with essential default values.
    """
    return {
        "environment": LOCAL_ENVIRONMENT,
        "store": {"name": "memory"},
        "auth": None,
    }


def resolve_environment(app_dict: Dict, environment: str = None) -> Dict:
    """
    Pick the settings of one environment out of the contents of an `app.yaml` file.

    The environment is chosen from, in order: the `environment` argument, the
    `RECORDBASE_ENV` environment variable, the `environment` entry of the file,
    and finally `development`.

    Args:
        app_dict: The contents of an `app.yaml` file.
        environment: An explicit environment name to use.

    Returns:
        A dictionary with the `environment` name and its `store` and `auth` sections.

    Raises:
        ValueError: If the chosen environment isn't defined in the file.
    """
    name = environment or os.environ.get(ENVIRONMENT_VAR) or app_dict.get("environment") or DEFAULT_ENVIRONMENT
    environments = app_dict.get("environments") or {}
    if name not in environments:
        available = ", ".join(environments) or "none"
        raise ValueError(f"Environment '{name}' is not defined in the config file. Available environments: {available}")

    settings = environments[name] or {}
    LOG.debug(f"Using configuration for environment '{name}'.")
    return {"environment": name, "store": settings.get("store"), "auth": settings.get("auth")}


def load_defaults(config: Dict):
    """
    Loads default configuration values into the provided resolved configuration.

    The store defaults to Firestore, which is the datastore the application was
    built against, and the Firestore project falls back to the auth project.

    Args:
        config: The resolved configuration dictionary to be updated with default values.
    """
    if not config.get("store"):
        config["store"] = {}
    config["store"].setdefault("name", "firestore")

    auth = config.get("auth") or {}
    if config["store"]["name"] == "firestore" and "project_id" not in config["store"] and auth.get("project_id"):
        config["store"]["project_id"] = auth["project_id"]


def get_config(path: Optional[str] = None, environment: Optional[str] = None, local: bool = False) -> Config:
    """
    Loads a Recordbase configuration file and returns a `Config` object for one environment.

    Args:
        path: The directory path to search for the configuration file.
            If `None`, default search paths are used.
        environment: The environment to load. See `resolve_environment` for the fallbacks.
        local: If True, skip the file entirely and use the local in-memory defaults.

    Returns:
        A `Config` object holding the store and auth settings of the environment.

    Raises:
        ValueError: If the configuration file cannot be found and it's not a local run.
    """
    if local:
        LOG.info("Using default configuration (local mode)")
        return Config(get_default_config())

    filepath: Optional[str] = find_config_file(path)
    if filepath is None:
        raise ValueError(
            "Cannot find a recordbase config file! Create the file "
            f"'{os.path.join(RECORDBASE_HOME, APP_FILENAME)}' or run in local mode."
        )
    config = resolve_environment(load_config(filepath), environment=environment)
    load_defaults(config)
    return Config(config)
