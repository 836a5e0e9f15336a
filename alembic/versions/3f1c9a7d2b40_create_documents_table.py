"""create documents table

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2024-07-01 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'documents',
        sa.Column('collection', sa.String(length=64), nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('owner_id', sa.String(length=128), nullable=True),
        sa.Column('natural_key', sa.String(length=255), nullable=True),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('collection', 'id'),
        sa.UniqueConstraint('collection', 'natural_key', name='ux_documents_collection_natural_key'),
    )
    op.create_index('ix_documents_owner_id', 'documents', ['owner_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_documents_owner_id', table_name='documents')
    op.drop_table('documents')
