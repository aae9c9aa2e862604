"""
repositories/errors.py
----------------------
Error taxonomy for the data access layer.

Driver failures are never wrapped: a psycopg2 exception raised while
executing a statement reaches the caller unchanged. `StoreError` is an
alias so services can catch it without importing psycopg2 directly.
"""

import psycopg2

StoreError = psycopg2.Error


class RepositoryError(Exception):
    """Base class for domain-level repository failures."""


class NotFound(RepositoryError):
    """A point lookup or keyed mutation matched zero rows."""


class NotFoundOrNotOwned(NotFound):
    """
    An owner-scoped mutation affected zero rows.

    Deliberately does not say whether the row is missing or belongs to
    someone else.
    """


class CorruptData(RepositoryError):
    """A row was found but one of its list columns could not be decoded."""
