##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the `Actor`, the snapshot of the signed-in user that
Recordbase stamps onto the records it creates.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


# Persisted key -> Actor attribute
ACTOR_FIELDS: Dict[str, str] = {
    "displayName": "display_name",
    "email": "email",
    "emailVerified": "email_verified",
    "isAnonymous": "is_anonymous",
    "phoneNumber": "phone_number",
    "photoURL": "photo_url",
    "providerData": "provider_data",
    "uid": "uid",
}


def _read(user: Any, persisted_key: str, attribute: str) -> Any:
    """
    Read one identity field from a user given either as a mapping (e.g. a REST
    response) or as an object (e.g. a client library user record).

    Args:
        user: The user to read from.
        persisted_key: The camelCase key used by the auth provider.
        attribute: The snake_case attribute name.

    Returns:
        The value, or None if the user doesn't have it.
    """
    if isinstance(user, dict):
        return user.get(persisted_key, user.get(attribute))
    return getattr(user, attribute, getattr(user, persisted_key, None))


@dataclass(frozen=True)
class Actor:
    """
    An immutable snapshot of the identity of the signed-in user.

    Attributes:
        uid: The unique id of the user.
        display_name: The user's display name.
        email: The user's email address.
        email_verified: Whether the email address has been verified.
        is_anonymous: Whether the user signed in anonymously.
        phone_number: The user's phone number.
        photo_url: A reference to the user's photo.
        provider_data: The identity providers linked to the user.
    """

    uid: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    email_verified: bool = False
    is_anonymous: bool = False
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    provider_data: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    @classmethod
    def from_user(cls, user: Any) -> Optional["Actor"]:
        """
        Capture a snapshot of a user.

        Args:
            user: The current user as returned by the auth provider, either a mapping
                or an object. May be None when nobody is signed in.

        Returns:
            An `Actor`, or None if `user` is None.
        """
        if user is None:
            return None

        values = {attribute: _read(user, key, attribute) for key, attribute in ACTOR_FIELDS.items()}
        providers = values["provider_data"] or ()
        values["provider_data"] = tuple(
            deepcopy(provider) if isinstance(provider, dict) else dict(vars(provider)) for provider in providers
        )
        values["email_verified"] = bool(values["email_verified"])
        values["is_anonymous"] = bool(values["is_anonymous"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the actor into the mapping that is persisted as `createdBy`.
        Every call returns a fresh copy.

        Returns:
            The actor's fields keyed by the auth provider's camelCase names.
        """
        snapshot = {key: getattr(self, attribute) for key, attribute in ACTOR_FIELDS.items()}
        snapshot["providerData"] = [deepcopy(provider) for provider in self.provider_data]
        return snapshot
