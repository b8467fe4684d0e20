##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Auth providers supply Recordbase with the identity of the signed-in user and
carry out account operations on its behalf.

This module defines:
- `AuthProvider`, the interface every provider implements.
- `StaticAuthProvider`, a provider with a fixed user and no account operations.
- `IdentityToolkitAuthProvider`, a provider backed by the Identity Toolkit REST API
  that Firebase Authentication is built on.
- `build_auth_provider`, which builds a provider from the `auth` configuration section.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from recordbase.exceptions import AuthOperationError


LOG = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class AuthProvider(ABC):
    """
    Base class for all auth providers supported in Recordbase.

    Methods:
        current_user: Get the signed-in user.
        send_password_reset: Send a password reset message to an email address.
    """

    @abstractmethod
    def current_user(self) -> Optional[Any]:
        """
        Get the signed-in user.

        Returns:
            The user as a mapping or object, or None if nobody is signed in.
        """
        raise NotImplementedError("Subclasses of `AuthProvider` must implement a `current_user` method.")

    @abstractmethod
    async def send_password_reset(self, email: str):
        """
        Send a password reset message to an email address.

        Args:
            email: The address to send the message to.

        Raises:
            AuthOperationError: If the provider fails to send the message.
        """
        raise NotImplementedError("Subclasses of `AuthProvider` must implement a `send_password_reset` method.")


class StaticAuthProvider(AuthProvider):
    """
    An auth provider with a fixed user, for local mode and scripts that act on
    behalf of a known account.
    """

    def __init__(self, user: Optional[Any] = None):
        self._user = user

    def current_user(self) -> Optional[Any]:
        return self._user

    async def send_password_reset(self, email: str):
        raise AuthOperationError("Password reset is not supported by the static auth provider.")


class IdentityToolkitAuthProvider(AuthProvider):
    """
    An auth provider backed by the Identity Toolkit REST API.

    Attributes:
        api_key (str): The web API key of the project.
        base_url (str): The root of the Identity Toolkit API.
        timeout (float): Timeout in seconds for each request.
    """

    def __init__(
        self,
        api_key: str,
        user: Optional[Any] = None,
        base_url: str = IDENTITY_TOOLKIT_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: The web API key of the project.
            user: The signed-in user, e.g. the account info of a verified ID token.
            base_url: The root of the Identity Toolkit API.
            timeout: Timeout in seconds for each request.
            client: An existing HTTP client to send requests with. When omitted a
                client is opened for each request.
        """
        if not api_key:
            raise ValueError("An API key is required for the Identity Toolkit auth provider.")
        self.api_key: str = api_key
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout
        self._user = user
        self._client = client

    def current_user(self) -> Optional[Any]:
        return self._user

    async def _post(self, client: httpx.AsyncClient, endpoint: str, payload: Dict) -> httpx.Response:
        return await client.post(f"{self.base_url}/{endpoint}", params={"key": self.api_key}, json=payload)

    async def send_password_reset(self, email: str):
        payload = {"requestType": "PASSWORD_RESET", "email": email}
        LOG.debug(f"Requesting a password reset message for '{email}'...")
        try:
            if self._client is not None:
                response = await self._post(self._client, "accounts:sendOobCode", payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, "accounts:sendOobCode", payload)
        except httpx.HTTPError as exc:
            raise AuthOperationError(f"Could not reach the auth provider: {exc}") from exc

        if response.is_error:
            raise AuthOperationError(_error_message(response))
        LOG.info(f"Password reset message sent to '{email}'.")


def _error_message(response: httpx.Response) -> str:
    """
    Extract the provider's error message from a failed response.

    Args:
        response: The failed response.

    Returns:
        The `error.message` of the JSON body, or the raw body if there isn't one.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.text


def build_auth_provider(settings: Optional[Dict], user: Optional[Any] = None) -> Optional[AuthProvider]:
    """
    Build an auth provider from the `auth` section of a configuration.

    Args:
        settings: The auth settings. An `api_key` selects the Identity Toolkit provider.
        user: The signed-in user, if one is known.

    Returns:
        An auth provider, a `StaticAuthProvider` when there's a user but no API key,
        or None when there's neither.
    """
    settings = settings or {}
    if settings.get("api_key"):
        options = {"api_key": settings["api_key"], "user": user}
        if settings.get("base_url"):
            options["base_url"] = settings["base_url"]
        if settings.get("timeout"):
            options["timeout"] = float(settings["timeout"])
        return IdentityToolkitAuthProvider(**options)
    if user is not None:
        return StaticAuthProvider(user)
    return None
