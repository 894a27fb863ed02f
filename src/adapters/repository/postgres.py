"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Serializing Registrations:
--------------------------
Each record is hashed with its own salt, so no unique index can reject a
duplicate email. Instead every session opens a transaction and takes a
transaction-scoped advisory lock before the duplicate scan. A second
session blocks until the first commits or rolls back, so scan-then-insert
is atomic with respect to other registrations.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import RegistrationStorageError
from src.domain.ports import Registration

logger = logging.getLogger(__name__)

_LOCK_SQL = """SELECT pg_advisory_xact_lock(hashtext('Registrations'))"""

_SELECT_SQL = """
    SELECT "Id", "FirstName", "LastName", "CreatedUtc", "EmailHash", "EmailHashSalt"
    FROM "Registrations"
    ORDER BY "Id"
"""

_INSERT_SQL = """
    INSERT INTO "Registrations" ("FirstName", "LastName", "CreatedUtc", "EmailHash", "EmailHashSalt")
    VALUES (%s, %s, %s, %s, %s)
    RETURNING "Id"
"""


class PostgresRegistrationSession:
    """
    Implements RegistrationSession protocol over one pooled connection.

    Created by PostgresRegistrationRepository.session(); the advisory
    lock is already held when callers receive it.
    """

    def __init__(self, conn: psycopg.Connection) -> None:
        self._conn = conn

    def list_registrations(self) -> list[Registration]:
        """Read every registration, ordered by id."""
        with self._conn.cursor() as cursor:
            cursor.execute(_SELECT_SQL)
            rows = cursor.fetchall()

        return [
            Registration(
                id=row[0],
                first_name=row[1],
                last_name=row[2],
                created_utc=row[3],
                email_hash=row[4],
                email_hash_salt=row[5] or "",
            )
            for row in rows
        ]

    def add(self, registration: Registration) -> Registration:
        """
        Insert a registration and commit.

        Committing ends the transaction and releases the advisory lock.

        Returns:
            The registration with its database-assigned id
        """
        with self._conn.cursor() as cursor:
            cursor.execute(
                _INSERT_SQL,
                (
                    registration.first_name,
                    registration.last_name,
                    registration.created_utc,
                    registration.email_hash,
                    registration.email_hash_salt,
                ),
            )
            row = cursor.fetchone()
        self._conn.commit()

        if row is None:
            raise RegistrationStorageError("Insert returned no id")
        return replace(registration, id=row[0])


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def session(self) -> Iterator[PostgresRegistrationSession]:
        """
        Open a locked session on a pooled connection.

        The connection is returned to the pool when the block exits,
        committing on success and rolling back on error.

        Raises:
            RegistrationStorageError: If the database cannot be reached or
                a statement fails
        """
        try:
            with self._pool.connection() as conn:
                conn.execute(_LOCK_SQL)
                yield PostgresRegistrationSession(conn)
        except psycopg.Error as e:
            logger.error(f"Registration storage failure: {e}")
            raise RegistrationStorageError("Registration storage unavailable") from e

    def check_health(self) -> None:
        """Run a trivial query to validate database connectivity."""
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            raise RegistrationStorageError("Registration storage unavailable") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)
                # Committed when the pool context exits

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
