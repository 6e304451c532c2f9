"""initial_schema

Revision ID: 1f3c9a7d2b40
Revises:
Create Date: 2026-10-19

Adds:
- users table (portal accounts with user_type role)
- sessions table for login sessions
- tree_nodes table backing the SQL key-value tree store

Note: After running this migration, create an admin user with:
    python -m app.cli create-admin --email your@email.com
"""
from alembic import op
import sqlalchemy as sa

revision = '1f3c9a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('phone_number', sa.String(20), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('user_type', sa.String(20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('token', sa.String(64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_agent', sa.String(512), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_sessions_token', 'sessions', ['token'], unique=True)

    op.create_table(
        'tree_nodes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('parent_path', sa.String(512), nullable=False),
        sa.Column('key', sa.String(128), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('parent_path', 'key', name='uq_tree_nodes_path'),
    )
    op.create_index('idx_tree_nodes_parent', 'tree_nodes', ['parent_path'])


def downgrade() -> None:
    op.drop_index('idx_tree_nodes_parent', table_name='tree_nodes')
    op.drop_table('tree_nodes')
    op.drop_index('ix_sessions_token', table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('users')
