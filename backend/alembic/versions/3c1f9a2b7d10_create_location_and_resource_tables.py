"""Create location and cached resource tables

Revision ID: 3c1f9a2b7d10
Revises:
Create Date: 2026-10-19 10:12:41.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('latitude', sa.Numeric(10, 7), nullable=False),
        sa.Column('longitude', sa.Numeric(10, 7), nullable=False),
        sa.Column('search_query', sa.String(255), nullable=False),
        sa.Column('formatted_query', sa.String(255), nullable=True),
    )
    op.create_index('ix_locations_id', 'locations', ['id'], unique=False)
    op.create_index('ix_locations_search_query', 'locations', ['search_query'], unique=True)

    op.create_table(
        'weathers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('forecast', sa.Text(), nullable=True),
        sa.Column('time', sa.String(50), nullable=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('link', sa.Text(), nullable=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('event_date', sa.String(50), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
    )

    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('overview', sa.Text(), nullable=True),
        sa.Column('average_votes', sa.Float(), nullable=True),
        sa.Column('total_votes', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('popularity', sa.Float(), nullable=True),
        sa.Column('released_on', sa.String(50), nullable=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
    )

    op.create_table(
        'yelps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('price', sa.String(10), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
    )

    # Every cache lookup filters on location_id
    for table in ('weathers', 'events', 'movies', 'yelps'):
        op.create_index(f'ix_{table}_id', table, ['id'], unique=False)
        op.create_index(f'ix_{table}_location_id', table, ['location_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop children before the table they reference
    for table in ('yelps', 'movies', 'events', 'weathers'):
        op.drop_index(f'ix_{table}_location_id', table_name=table)
        op.drop_index(f'ix_{table}_id', table_name=table)
        op.drop_table(table)

    op.drop_index('ix_locations_search_query', table_name='locations')
    op.drop_index('ix_locations_id', table_name='locations')
    op.drop_table('locations')
