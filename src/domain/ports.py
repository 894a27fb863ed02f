"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the value types exchanged with infrastructure and
the interfaces (ports) that the domain requires from it. Adapters
implement these protocols.
"""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class Registration:
    """
    Persisted registration record.

    The plaintext email is never part of a record; only its salted hash
    and the per-record salt are stored. Records are never updated.
    """

    id: int | None
    first_name: str
    last_name: str
    created_utc: datetime
    email_hash: str
    email_hash_salt: str


@dataclass(frozen=True)
class RegistrationSubmission:
    """Validated form input handed to the registration service."""

    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class RegistrationOutcome:
    """
    Result of handling a submission.

    Exactly one of the two display flags is set.
    """

    show_success_message: bool
    show_error_message: bool
    registration_id: int | None = None

    @classmethod
    def stored(cls, registration_id: int | None) -> "RegistrationOutcome":
        return cls(show_success_message=True, show_error_message=False, registration_id=registration_id)

    @classmethod
    def duplicate(cls) -> "RegistrationOutcome":
        return cls(show_success_message=False, show_error_message=True)


class EmailHasher(Protocol):
    """Port interface for salted, deterministic email hashing."""

    def hash(self, plaintext: str, salt: str | None = None) -> tuple[str, str]:
        """
        Hash plaintext with a salt.

        Args:
            plaintext: Value to hash
            salt: Salt to reuse; a fresh random salt is generated when omitted

        Returns:
            Tuple of (hash, salt used)

        Raises:
            ValueError: If salt is given and is not valid for this hasher
        """
        ...

    def is_valid_salt(self, salt: str) -> bool:
        """Whether salt can be passed back to hash()."""
        ...


class RegistrationSession(Protocol):
    """Unit of work over the registration store, scoped to one request."""

    def list_registrations(self) -> list[Registration]:
        """Read every stored registration, ordered by id."""
        ...

    def add(self, registration: Registration) -> Registration:
        """
        Insert and commit a registration.

        Returns:
            The stored registration with its assigned id
        """
        ...


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def session(self) -> AbstractContextManager[RegistrationSession]:
        """
        Open a storage session.

        Concurrent sessions are serialized so that a scan followed by an
        insert within one session cannot interleave with another.
        """
        ...

    def check_health(self) -> None:
        """Raise RegistrationStorageError when storage is unreachable."""
        ...
