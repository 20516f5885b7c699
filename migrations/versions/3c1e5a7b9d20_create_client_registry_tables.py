"""Create client registry tables

Revision ID: 3c1e5a7b9d20
Revises:
Create Date: 2026-10-17 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1e5a7b9d20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('tax_id', sa.String(length=11), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_clients_tax_id', 'clients', ['tax_id'], unique=True)

    op.create_table(
        'addresses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('postal_code', sa.String(length=8), nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('complement', sa.String(length=255), nullable=True),
        sa.Column('district', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('client_id'),
    )

    op.create_table(
        'phone_numbers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('digits', sa.String(length=11), nullable=False),
        sa.Column('kind', sa.Enum('MOBILE', 'LANDLINE', 'BUSINESS', name='phone_kind', native_enum=False, length=20), nullable=False),
        sa.Column('is_principal', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('client_id', 'digits', name='uq_phone_numbers_client_digits'),
    )
    op.create_index(
        'uq_phone_numbers_one_principal',
        'phone_numbers',
        ['client_id'],
        unique=True,
        postgresql_where=sa.text('is_principal'),
        sqlite_where=sa.text('is_principal = 1'),
    )

    op.create_table(
        'email_addresses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('address_normalized', sa.String(length=255), nullable=False),
        sa.Column('is_principal', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('client_id', 'address_normalized', name='uq_email_addresses_client_address'),
    )
    op.create_index(
        'uq_email_addresses_one_principal',
        'email_addresses',
        ['client_id'],
        unique=True,
        postgresql_where=sa.text('is_principal'),
        sqlite_where=sa.text('is_principal = 1'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_email_addresses_one_principal', table_name='email_addresses')
    op.drop_table('email_addresses')
    op.drop_index('uq_phone_numbers_one_principal', table_name='phone_numbers')
    op.drop_table('phone_numbers')
    op.drop_table('addresses')
    op.drop_index('ix_clients_tax_id', table_name='clients')
    op.drop_table('clients')
