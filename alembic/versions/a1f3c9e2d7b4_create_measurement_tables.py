"""create measurement tables

Revision ID: a1f3c9e2d7b4
Revises:
Create Date: 2026-10-19 09:12:40.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f3c9e2d7b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'daily_measurements',
        sa.Column('subnet', sa.String(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('total', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('successful', sa.BigInteger(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('subnet', 'day'),
    )

    # One row per geo-filecoin check
    op.create_table(
        'geo_measurements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('subnet', sa.String(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('successful', sa.SmallInteger(), nullable=False),
        sa.Column('continent', sa.String(), nullable=True),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('latency', sa.Float(), nullable=True),
        sa.Column('ttfb', sa.Float(), nullable=True),
        sa.Column('throughput', sa.Float(), nullable=True),
        sa.Column('miner_id', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_geo_measurements_id', 'geo_measurements', ['id'])
    op.create_index('ix_geo_measurements_subnet_day', 'geo_measurements', ['subnet', 'day'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_geo_measurements_subnet_day', table_name='geo_measurements')
    op.drop_index('ix_geo_measurements_id', table_name='geo_measurements')
    op.drop_table('geo_measurements')
    op.drop_table('daily_measurements')
