"""Hashing adapters - Salted email hash implementations."""

from .bcrypt_hasher import BcryptEmailHasher

__all__ = ["BcryptEmailHasher"]
