"""boards, members, views and cards

Revision ID: 0002
Revises: 0001
Create Date: 2026-09-01 10:05:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002'
down_revision = '0001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('boards',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=32), nullable=False),
        sa.Column('type', sa.String(length=1), nullable=False),
        sa.Column('created_by', sa.String(length=36), nullable=False),
        sa.Column('modified_by', sa.String(length=36), nullable=False),
        sa.Column('card_properties', sa.JSON(), nullable=False),
        sa.Column('create_at', sa.BigInteger(), nullable=True),
        sa.Column('update_at', sa.BigInteger(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('board_members',
        sa.Column('board_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('scheme_admin', sa.Boolean(), nullable=True),
        sa.Column('scheme_editor', sa.Boolean(), nullable=True),
        sa.Column('scheme_commenter', sa.Boolean(), nullable=True),
        sa.Column('scheme_viewer', sa.Boolean(), nullable=True),
        sa.Column('minimum_role', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('board_id', 'user_id')
    )
    op.create_index('ix_board_members_user_id', 'board_members', ['user_id'], unique=False)

    op.create_table('board_views',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('board_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('view_type', sa.String(length=20), nullable=False),
        sa.Column('fields', sa.JSON(), nullable=False),
        sa.Column('create_at', sa.BigInteger(), nullable=True),
        sa.Column('update_at', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_board_views_board_id', 'board_views', ['board_id'], unique=False)

    op.create_table('cards',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('board_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('icon', sa.String(length=32), nullable=False),
        sa.Column('created_by', sa.String(length=36), nullable=False),
        sa.Column('modified_by', sa.String(length=36), nullable=False),
        sa.Column('properties', sa.JSON(), nullable=False),
        sa.Column('assignees', sa.JSON(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('create_at', sa.BigInteger(), nullable=True),
        sa.Column('update_at', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_cards_board_id', 'cards', ['board_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_cards_board_id', table_name='cards')
    op.drop_table('cards')

    op.drop_index('ix_board_views_board_id', table_name='board_views')
    op.drop_table('board_views')

    op.drop_index('ix_board_members_user_id', table_name='board_members')
    op.drop_table('board_members')

    op.drop_table('boards')
