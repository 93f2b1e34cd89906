"""create app_settings table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 09:30:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS app_settings (
            key VARCHAR(100) PRIMARY KEY,
            value TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMP NOT NULL DEFAULT NOW()
        );

        -- Create trigger to update updated_at timestamp
        CREATE OR REPLACE FUNCTION update_app_settings_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;

        DROP TRIGGER IF EXISTS app_settings_updated_at_trigger ON app_settings;
        CREATE TRIGGER app_settings_updated_at_trigger
            BEFORE UPDATE ON app_settings
            FOR EACH ROW
            EXECUTE FUNCTION update_app_settings_updated_at();
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("""
        DROP TRIGGER IF EXISTS app_settings_updated_at_trigger ON app_settings;
        DROP FUNCTION IF EXISTS update_app_settings_updated_at();
        DROP TABLE IF EXISTS app_settings CASCADE;
    """)
