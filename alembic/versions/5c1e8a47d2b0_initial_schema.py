"""Initial schema for the User Access Service

Revision ID: 5c1e8a47d2b0
Revises:
Create Date: 2026-01-15

Tables Created:
- accounts: account profiles
- credentials: password hashes, one per account
- access_levels: role definitions
- account_access_levels: account/role assignments (soft-deletable)

Uniqueness of accounts.email and access_levels.name only applies to rows
that are not soft-deleted (partial unique indexes).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e8a47d2b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _create_timestamp_indexes(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)
    op.create_index(op.f(f'ix_{table}_deleted_at'), table, ['deleted_at'], unique=False)


def upgrade() -> None:
    """
    Upgrade schema.

    Creates the four tables with their foreign keys (ON DELETE CASCADE) and
    the partial unique indexes on email and access level name.
    """
    # =========================================================================
    # STEP 1: Create Base Tables (no dependencies)
    # =========================================================================

    # accounts table
    op.create_table(
        'accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounts'))
    )
    _create_timestamp_indexes('accounts')
    op.create_index(op.f('ix_accounts_email'), 'accounts', ['email'], unique=False)
    op.create_index(
        'uq_accounts_email_active',
        'accounts',
        ['email'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
        sqlite_where=sa.text('deleted_at IS NULL'),
    )

    # access_levels table
    op.create_table(
        'access_levels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_access_levels'))
    )
    _create_timestamp_indexes('access_levels')
    op.create_index(
        'uq_access_levels_name_active',
        'access_levels',
        ['name'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
        sqlite_where=sa.text('deleted_at IS NULL'),
    )

    # =========================================================================
    # STEP 2: Create Dependent Tables (depend on accounts/access_levels)
    # =========================================================================

    # credentials table
    op.create_table(
        'credentials',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['account_id'], ['accounts.id'],
            name=op.f('fk_credentials_account_id_accounts'),
            ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_credentials'))
    )
    _create_timestamp_indexes('credentials')
    op.create_index(op.f('ix_credentials_account_id'), 'credentials', ['account_id'], unique=True)

    # account_access_levels table (composite key is the upsert conflict target)
    op.create_table(
        'account_access_levels',
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('access_level_id', sa.Integer(), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['account_id'], ['accounts.id'],
            name=op.f('fk_account_access_levels_account_id_accounts'),
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['access_level_id'], ['access_levels.id'],
            name=op.f('fk_account_access_levels_access_level_id_access_levels'),
            ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('account_id', 'access_level_id', name=op.f('pk_account_access_levels'))
    )
    _create_timestamp_indexes('account_access_levels')
    op.create_index(
        op.f('ix_account_access_levels_account_id'),
        'account_access_levels', ['account_id'], unique=False
    )
    op.create_index(
        op.f('ix_account_access_levels_access_level_id'),
        'account_access_levels', ['access_level_id'], unique=False
    )


def downgrade() -> None:
    """
    Downgrade schema.

    Removes all tables in reverse dependency order.
    """
    op.drop_table('account_access_levels')
    op.drop_table('credentials')
    op.drop_table('access_levels')
    op.drop_table('accounts')
