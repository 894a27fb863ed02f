"""
bcrypt email hasher adapter - Implements EmailHasher protocol.

bcrypt is deterministic for a given salt, which is what duplicate
detection relies on: hashing the same email with a stored record's salt
reproduces that record's hash.

bcrypt only accepts 72 bytes of input. The email is reduced to a
base64-encoded SHA-256 digest (44 bytes) first, so long addresses are
neither truncated nor rejected.
"""

import base64
import hashlib
import re

import bcrypt

_SALT_PATTERN = re.compile(r"\$2[aby]\$(?P<cost>\d{2})\$[./A-Za-z0-9]{21}[.Oeu]")


class BcryptEmailHasher:
    """
    Implements EmailHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = 10) -> None:
        """
        Initialize hasher.

        Args:
            rounds: bcrypt cost factor for newly generated salts (4-31)
        """
        self._rounds = rounds

    def hash(self, plaintext: str, salt: str | None = None) -> tuple[str, str]:
        """
        Hash plaintext with the given salt, or a fresh one.

        Args:
            plaintext: Value to hash
            salt: bcrypt salt string (e.g. "$2b$10$..."); generated when omitted

        Returns:
            Tuple of (hash, salt used)

        Raises:
            ValueError: If salt is not a valid bcrypt salt
        """
        if salt is None:
            salt = bcrypt.gensalt(rounds=self._rounds).decode()
        elif not self.is_valid_salt(salt):
            raise ValueError("Invalid salt")
        digest = bcrypt.hashpw(self._prehash(plaintext), salt.encode())
        return digest.decode(), salt

    def is_valid_salt(self, salt: str) -> bool:
        """
        Check that salt is a salt this hasher can reuse.

        Accepts the 29-character form produced by bcrypt.gensalt: version
        2a/2b/2y, a cost of 04-31 and 22 characters of bcrypt base64 whose
        last character carries no stray bits.
        """
        match = _SALT_PATTERN.fullmatch(salt)
        return match is not None and 4 <= int(match.group("cost")) <= 31

    @staticmethod
    def _prehash(plaintext: str) -> bytes:
        return base64.b64encode(hashlib.sha256(plaintext.encode()).digest())
