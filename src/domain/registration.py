"""
Registration domain service - duplicate check and registration.

Every stored record carries its own random salt, so an email can only be
matched by re-hashing it with each record's salt in turn. Detection is a
linear scan over all registrations; no index can help.

Check-then-insert runs inside a single repository session. Repositories
serialize sessions, so two concurrent submissions of the same email
cannot both pass the scan.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .ports import (
    EmailHasher,
    Registration,
    RegistrationOutcome,
    RegistrationRepository,
    RegistrationSession,
    RegistrationSubmission,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RegistrationService:
    """
    Domain service for registration capture.

    Stateless apart from its injected repository and hasher.
    """

    repository: RegistrationRepository
    hasher: EmailHasher
    clock: Callable[[], datetime] = field(default=_utcnow)

    def handle_registration(self, submission: RegistrationSubmission) -> RegistrationOutcome:
        """
        Store a submission unless its email is already registered.

        Emails are compared exactly as submitted (no trimming or case folding).

        Args:
            submission: Validated form input

        Returns:
            RegistrationOutcome with the success flag and new record id,
            or the error flag when the email is a duplicate

        Raises:
            RegistrationStorageError: If storage cannot be read or written
        """
        with self.repository.session() as session:
            if self._email_exists(session, submission.email):
                logger.info(
                    "Registration of %s %s (%s) failed.",
                    submission.first_name,
                    submission.last_name,
                    submission.email,
                )
                return RegistrationOutcome.duplicate()

            email_hash, salt = self.hasher.hash(submission.email)
            registration = session.add(
                Registration(
                    id=None,
                    first_name=submission.first_name,
                    last_name=submission.last_name,
                    created_utc=self.clock(),
                    email_hash=email_hash,
                    email_hash_salt=salt,
                )
            )

        logger.info(
            "Registration of %s %s (%s) stored in database with ID %s.",
            submission.first_name,
            submission.last_name,
            submission.email,
            registration.id,
        )
        return RegistrationOutcome.stored(registration.id)

    def _email_exists(self, session: RegistrationSession, email: str) -> bool:
        """
        Scan every registration for a hash match.

        Rows migrated in before email hashing have an empty hash or a salt
        the hasher cannot use, and can never match.
        """
        for registration in session.list_registrations():
            if not registration.email_hash or not registration.email_hash_salt:
                continue
            if not self.hasher.is_valid_salt(registration.email_hash_salt):
                continue
            candidate, _ = self.hasher.hash(email, registration.email_hash_salt)
            if secrets.compare_digest(candidate.encode(), registration.email_hash.encode()):
                return True
        return False
