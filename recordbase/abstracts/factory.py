##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Base factory for the pluggable components of Recordbase, such as document stores.

A factory keeps a registry of component classes by name, resolves alternate names
to registered ones, and loads extra components that installed packages advertise
under the factory's entry point group.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List, Type


LOG = logging.getLogger(__name__)


class RecordbaseBaseFactory(ABC):
    """
    Abstract base factory that registers component classes and builds instances of them.

    Subclasses register their built-in components, decide which classes are valid
    components, and may change the entry point group and the error raised for an
    unknown name.

    Attributes:
        entry_point_group (str): The entry point group searched for plugin components.
        unsupported_error (Type[Exception]): The error raised for an unknown component name.
        _registry (Dict[str, Any]): Registered name -> component class.
        _aliases (Dict[str, str]): Alternate name -> registered name.

    Methods:
        register: Register a component class under a name and optional aliases.
        list_available: Get the registered names, plugins included.
        create: Build a component by name or alias.
    """

    entry_point_group: str = None
    unsupported_error: Type[Exception] = ValueError

    def __init__(self):
        self._registry: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """
        Register the components that ship with Recordbase.
        """
        raise NotImplementedError("Subclasses of `RecordbaseBaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Check that a class can be registered.

        Args:
            component_class: The class to check.

        Raises:
            TypeError: If `component_class` isn't a valid component.
        """
        raise NotImplementedError(
            "Subclasses of `RecordbaseBaseFactory` must implement a `_validate_component` method."
        )

    def _load_plugins(self):
        """
        Register the components advertised under `entry_point_group` that aren't
        registered yet. A plugin that fails to load is logged and skipped.
        """
        if not self.entry_point_group:
            return
        for entry_point in entry_points(group=self.entry_point_group):
            if entry_point.name in self._registry:
                continue
            try:
                self.register(entry_point.name, entry_point.load())
                LOG.info(f"Loaded plugin '{entry_point.name}' from group '{self.entry_point_group}'.")
            except Exception as exc:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}': {exc}")

    def register(self, name: str, component_class: Any, aliases: List[str] = None):
        """
        Register a component class.

        Args:
            name: The name the component is created by.
            component_class: The class to register.
            aliases: Other names that resolve to `name`.

        Raises:
            TypeError: If `component_class` isn't a valid component.
        """
        self._validate_component(component_class)
        self._registry[name] = component_class
        for alias in aliases or []:
            self._aliases[alias] = name
        LOG.debug(f"Registered component '{name}' (aliases: {aliases or []}).")

    def list_available(self) -> List[str]:
        """
        Get the names of every component that can be created.

        Returns:
            The registered names, plugins included. Aliases aren't listed.
        """
        self._load_plugins()
        return list(self._registry)

    def create(self, name: str, config: Dict = None) -> Any:
        """
        Build a component.

        Args:
            name: The name or alias of the component.
            config: Keyword arguments for the component's constructor.

        Returns:
            The new component.

        Raises:
            unsupported_error: If no component has that name.
            ValueError: If the component's constructor failed.
        """
        canonical_name = self._aliases.get(name, name)
        if canonical_name not in self._registry:
            self._load_plugins()
        component_class = self._registry.get(canonical_name)
        if component_class is None:
            available = ", ".join(self.list_available())
            raise self.unsupported_error(
                f"Component '{name}' is not supported. Available components: {available}"
            )

        try:
            instance = component_class(**(config or {}))
        except Exception as exc:
            raise ValueError(f"Failed to create component '{canonical_name}': {exc}") from exc
        LOG.info(f"Created component '{canonical_name}'.")
        return instance
