"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fast bcrypt email hasher (minimum cost factor)
- In-memory registration storage
- Test application wiring with dependency overrides
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.hashing.bcrypt_hasher import BcryptEmailHasher
from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.api.dependencies import get_email_hasher
from src.api.errors import register_exception_handlers
from src.api.routes import router as form_router
from src.api.v1.routes import router as v1_router
from src.domain.registration import RegistrationService


@pytest.fixture
def hasher() -> BcryptEmailHasher:
    """bcrypt hasher at the minimum cost factor to keep tests fast."""
    return BcryptEmailHasher(rounds=4)


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryRegistrationRepository()


@pytest.fixture
def service(
    repository: InMemoryRegistrationRepository, hasher: BcryptEmailHasher
) -> RegistrationService:
    return RegistrationService(repository=repository, hasher=hasher)


@pytest.fixture
def app(repository: InMemoryRegistrationRepository, hasher: BcryptEmailHasher) -> FastAPI:
    """Create test FastAPI application backed by in-memory storage."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(form_router)
    test_app.include_router(v1_router, prefix="/v1")

    test_app.state.repository = repository
    test_app.dependency_overrides[get_email_hasher] = lambda: hasher

    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
