"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
failures without leaking infrastructure details. A duplicate email is
a normal outcome and has no exception.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class RegistrationStorageError(RegistrationError):
    """Registration storage could not be read or written."""

    pass
