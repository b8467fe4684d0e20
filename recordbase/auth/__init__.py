##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `auth` package holds the collaborators that tell Recordbase who is acting and
how to reach them.

Modules:
    actor: The immutable snapshot of the signed-in user.
    auth_provider: The `AuthProvider` interface and its implementations.
    notifier: Sinks for user-facing messages.
"""

from recordbase.auth.actor import Actor
from recordbase.auth.auth_provider import (
    AuthProvider,
    IdentityToolkitAuthProvider,
    StaticAuthProvider,
    build_auth_provider,
)
from recordbase.auth.notifier import ConsoleNotifier, LoggingNotifier, Notifier


__all__ = [
    "Actor",
    "AuthProvider",
    "ConsoleNotifier",
    "IdentityToolkitAuthProvider",
    "LoggingNotifier",
    "Notifier",
    "StaticAuthProvider",
    "build_auth_provider",
]
