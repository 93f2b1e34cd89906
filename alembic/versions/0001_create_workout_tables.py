"""create workouts and workout_samples tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS workouts (
            id VARCHAR(64) PRIMARY KEY,
            activity_type VARCHAR(20) NOT NULL,
            start_time TIMESTAMPTZ NOT NULL,
            end_time TIMESTAMPTZ NOT NULL,
            duration_seconds DOUBLE PRECISION NOT NULL,
            total_distance_meters DOUBLE PRECISION NOT NULL DEFAULT 0,
            elevation_gain_meters DOUBLE PRECISION NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );

        CREATE INDEX IF NOT EXISTS idx_workouts_end_time ON workouts(end_time DESC);

        CREATE TABLE IF NOT EXISTS workout_samples (
            id BIGSERIAL PRIMARY KEY,
            workout_id VARCHAR(64) NOT NULL REFERENCES workouts(id) ON DELETE CASCADE,
            kind VARCHAR(20) NOT NULL CHECK (kind IN ('distance', 'heart_rate')),
            start_time TIMESTAMPTZ NOT NULL,
            end_time TIMESTAMPTZ NOT NULL,
            value DOUBLE PRECISION NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_workout_samples_lookup
            ON workout_samples(workout_id, kind, start_time);
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("""
        DROP TABLE IF EXISTS workout_samples CASCADE;
        DROP TABLE IF EXISTS workouts CASCADE;
    """)
