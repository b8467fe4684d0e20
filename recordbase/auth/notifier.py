##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Notifiers show user-facing messages, such as the reason an auth operation failed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape


LOG = logging.getLogger(__name__)


class Notifier(ABC):
    """
    Base class for a sink of user-facing messages.
    """

    @abstractmethod
    def display(self, message: str):
        """
        Show a message to the user.

        Args:
            message: The message to show.
        """
        raise NotImplementedError("Subclasses of `Notifier` must implement a `display` method.")


class LoggingNotifier(Notifier):
    """
    A notifier that writes messages to a logger. This is the default notifier.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.WARNING):
        self.logger: logging.Logger = logger or LOG
        self.level: int = level

    def display(self, message: str):
        self.logger.log(self.level, message)


class ConsoleNotifier(Notifier):
    """
    A notifier that prints messages to the terminal with rich.
    """

    def __init__(self, console: Optional[Console] = None, style: str = "bold red"):
        self.console: Console = console or Console(stderr=True)
        self.style: str = style

    def display(self, message: str):
        self.console.print(escape(message), style=self.style)
