"""add kv_entries table

Revision ID: d1e4a6b8c9f0
Revises:
Create Date: 2026-10-19 00:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd1e4a6b8c9f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()
    if 'kv_entries' not in tables:
        op.create_table(
            'kv_entries',
            sa.Column('key', sa.String(128), primary_key=True, nullable=False),
            sa.Column('value', sa.Text(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        )
        op.create_index('ix_kv_entries_key', 'kv_entries', ['key'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP INDEX IF EXISTS ix_kv_entries_key')
    op.execute('DROP TABLE IF EXISTS kv_entries')
