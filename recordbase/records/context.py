##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the `AccessContext`, the connection state every model shares.

A context is built once, from a configuration or from already-constructed
collaborators, and is read-only afterwards. The signed-in user is captured when the
context is built; a new sign-in needs a new context.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from recordbase.auth.actor import Actor
from recordbase.auth.auth_provider import AuthProvider, build_auth_provider
from recordbase.auth.notifier import LoggingNotifier, Notifier
from recordbase.backends.backend_factory import store_factory
from recordbase.backends.store_base import DocumentStore
from recordbase.config import Config
from recordbase.exceptions import NotConfiguredError


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessContext:
    """
    The store connection, auth provider, and signed-in user shared by every model.

    Attributes:
        store: The document store. None if no store has been connected.
        auth: The auth provider. None if auth isn't configured.
        notifier: Where user-facing messages go.
        actor: The user who was signed in when the context was built.

    Methods:
        create: Build a context from collaborators, capturing the signed-in user.
        from_config: Build a context from a configuration.
        require_store: Get the store or fail.
        require_auth: Get the auth provider or fail.
        close: Release the store connection.
    """

    store: Optional[DocumentStore] = None
    auth: Optional[AuthProvider] = None
    notifier: Notifier = field(default_factory=LoggingNotifier)
    actor: Optional[Actor] = None

    @classmethod
    def create(
        cls,
        store: Optional[DocumentStore] = None,
        auth: Optional[AuthProvider] = None,
        notifier: Optional[Notifier] = None,
    ) -> "AccessContext":
        """
        Build a context from collaborators that already exist.

        Args:
            store: The document store.
            auth: The auth provider. Its current user becomes the context's actor.
            notifier: Where user-facing messages go. Defaults to a `LoggingNotifier`.

        Returns:
            A new context.
        """
        actor = Actor.from_user(auth.current_user()) if auth is not None else None
        context = cls(store=store, auth=auth, notifier=notifier or LoggingNotifier(), actor=actor)
        LOG.info(
            f"Created access context (store: {getattr(store, 'store_name', None)}, "
            f"user: {actor.uid if actor else None})."
        )
        return context

    @classmethod
    def from_config(
        cls, config: Config, user: Optional[Any] = None, notifier: Optional[Notifier] = None
    ) -> "AccessContext":
        """
        Build a context from the store and auth sections of a configuration.

        Args:
            config: The configuration of the environment to connect to.
            user: The signed-in user, if one is known.
            notifier: Where user-facing messages go.

        Returns:
            A new context.
        """
        store = store_factory.create_from_settings(config.get_store_settings())
        auth = build_auth_provider(config.get_auth_settings(), user=user)
        return cls.create(store=store, auth=auth, notifier=notifier)

    def require_store(self) -> DocumentStore:
        """
        Get the document store.

        Returns:
            The store.

        Raises:
            NotConfiguredError: If no store has been connected.
        """
        if self.store is None:
            raise NotConfiguredError("The document store has not been connected.")
        return self.store

    def require_auth(self) -> AuthProvider:
        """
        Get the auth provider.

        Returns:
            The auth provider.

        Raises:
            NotConfiguredError: If auth isn't configured.
        """
        if self.auth is None:
            raise NotConfiguredError("No auth provider has been configured.")
        return self.auth

    async def close(self):
        """
        Release the store connection, if there is one.
        """
        if self.store is not None:
            await self.store.close()
