"""user notifications

Revision ID: 0003
Revises: 0002
Create Date: 2026-09-01 10:10:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0003'
down_revision = '0002'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Idempotent: skip when the table already exists
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    if 'user_notifications' in inspector.get_table_names():
        return

    op.create_table('user_notifications',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('target_user_id', sa.String(length=36), nullable=False),
        sa.Column('actor_user_id', sa.String(length=36), nullable=False),
        sa.Column('actor_name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('card_id', sa.String(length=36), nullable=False),
        sa.Column('card_title', sa.String(length=255), nullable=False),
        sa.Column('board_id', sa.String(length=36), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('create_at', sa.BigInteger(), nullable=False),
        sa.Column('update_at', sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_user_notifications_target_user', 'user_notifications', ['target_user_id'], unique=False)
    op.create_index('idx_user_notifications_create_at', 'user_notifications', ['create_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_user_notifications_create_at', table_name='user_notifications')
    op.drop_index('idx_user_notifications_target_user', table_name='user_notifications')
    op.drop_table('user_notifications')
