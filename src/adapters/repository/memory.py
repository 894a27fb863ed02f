"""
In-memory repository adapter - Implements RegistrationRepository protocol.

Process-local storage for development and tests. A single lock is held
for the lifetime of each session, giving the same serialization as the
PostgreSQL advisory lock.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from itertools import count

from src.domain.ports import Registration


class InMemoryRegistrationSession:
    """Implements RegistrationSession protocol over the repository's list."""

    def __init__(self, repository: "InMemoryRegistrationRepository") -> None:
        self._repository = repository

    def list_registrations(self) -> list[Registration]:
        return list(self._repository._registrations)

    def add(self, registration: Registration) -> Registration:
        stored = replace(registration, id=next(self._repository._ids))
        self._repository._registrations.append(stored)
        return stored


class InMemoryRegistrationRepository:
    """
    Implements RegistrationRepository protocol with a Python list.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        self._registrations: list[Registration] = []
        self._ids = count(1)
        self._lock = threading.Lock()

    @contextmanager
    def session(self) -> Iterator[InMemoryRegistrationSession]:
        with self._lock:
            yield InMemoryRegistrationSession(self)

    def check_health(self) -> None:
        return None
