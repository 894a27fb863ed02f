"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request

from src.adapters.hashing.bcrypt_hasher import BcryptEmailHasher
from src.config.settings import get_settings
from src.domain.ports import EmailHasher, RegistrationRepository
from src.domain.registration import RegistrationService


def get_repository(request: Request) -> RegistrationRepository:
    """
    Get registration repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


@lru_cache
def get_email_hasher() -> EmailHasher:
    """Get bcrypt email hasher (singleton, stateless)."""
    return BcryptEmailHasher(rounds=get_settings().email_hash_rounds)


def get_registration_service(
    repository: RegistrationRepository = Depends(get_repository),
    hasher: EmailHasher = Depends(get_email_hasher),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository and email hasher for the domain service.
    """
    return RegistrationService(repository=repository, hasher=hasher)
