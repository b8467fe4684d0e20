##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module of all Recordbase-specific exception types.
"""

__all__ = (
    "RecordbaseError",
    "NotConfiguredError",
    "ReferenceNotFoundError",
    "BatchCommitError",
    "AuthOperationError",
    "StoreNotSupportedError",
)


class RecordbaseError(Exception):
    """
    Base class for every error raised by Recordbase.
    """


class NotConfiguredError(RecordbaseError):
    """
    Exception to signal that the store or auth connection has not been
    established for an operation that needs it.
    """


class ReferenceNotFoundError(RecordbaseError):
    """
    Exception to signal that a non-empty reference key did not match any
    of the candidate records it was resolved against.
    """

    def __init__(self, key: str):
        super().__init__(f"No record with key '{key}' exists in the provided candidates.")
        self.key = key


class BatchCommitError(RecordbaseError):
    """
    Exception to signal that the store rejected an atomic batch commit.
    None of the writes staged in the batch were applied.
    """


class AuthOperationError(RecordbaseError):
    """
    Exception to signal that the auth provider failed an operation such as
    sending a password reset message. The message is the provider's text.
    """


class StoreNotSupportedError(RecordbaseError):
    """
    Exception to signal that the provided store name is not supported by Recordbase.
    """
