"""Postgres access for the workout and settings tables.

Each call opens its own short-lived connection; the live session never touches
the database, so only request handlers running in the threadpool pay for it.
"""

import os
from contextlib import contextmanager
from typing import Iterator

import psycopg


def get_database_url() -> str:
    """The URL from DATABASE_URL, which the app checks for at startup."""
    return os.environ["DATABASE_URL"]


@contextmanager
def get_db_connection() -> Iterator[psycopg.Connection]:
    conn = psycopg.connect(get_database_url())
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def get_db_cursor() -> Iterator[psycopg.Cursor]:
    """Yield a cursor whose statements run as one transaction.

    Saving a workout inserts the `workouts` row and all of its `workout_samples`
    through the same cursor, so either the whole workout is stored or none of it.
    """
    with get_db_connection() as conn:
        with conn.cursor() as cursor:
            try:
                yield cursor
                conn.commit()
            except Exception:
                conn.rollback()
                raise
