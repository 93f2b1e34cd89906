"""Database operations for the key-value settings table."""

import logging

from .connection import get_db_cursor

logger = logging.getLogger(__name__)


def get_setting(key: str) -> str | None:
    """Get the stored value for a setting, or None if it was never set."""
    with get_db_cursor() as cursor:
        cursor.execute(
            "SELECT value FROM app_settings WHERE key = %s",
            (key,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return row[0]


def upsert_setting(key: str, value: str) -> None:
    """Insert or update a setting."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            INSERT INTO app_settings (key, value)
            VALUES (%s, %s)
            ON CONFLICT (key)
            DO UPDATE SET
                value = EXCLUDED.value,
                updated_at = CURRENT_TIMESTAMP
            """,
            (key, value),
        )

    logger.info(f"Updated setting: {key}")

