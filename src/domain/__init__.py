"""
Domain layer - Pure business logic with zero framework imports.

This package contains the duplicate check and registration logic. It
defines its own port interfaces for infrastructure abstraction, keeping
hashing and storage behind protocols.
"""

from .exceptions import RegistrationError, RegistrationStorageError
from .ports import (
    EmailHasher,
    Registration,
    RegistrationOutcome,
    RegistrationRepository,
    RegistrationSession,
    RegistrationSubmission,
)
from .registration import RegistrationService

__all__ = [
    "EmailHasher",
    "Registration",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationRepository",
    "RegistrationService",
    "RegistrationSession",
    "RegistrationStorageError",
    "RegistrationSubmission",
]
