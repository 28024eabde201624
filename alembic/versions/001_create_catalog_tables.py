"""Create products and variants tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _listing_columns() -> list[sa.Column]:
    """Columns shared by products and variants."""
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('sku', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=False),
        sa.Column('url_key', sa.String(255), nullable=False),
        sa.Column('meta_title', sa.String(255), nullable=False),
        sa.Column('meta_description', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    """Create products and variants tables."""
    # Products table
    op.create_table(
        'products',
        *_listing_columns(),
        sa.Column('type', sa.String(32), nullable=False, server_default='simple'),
        sa.Column('created_by_user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('new_from_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('new_to_date', sa.DateTime(timezone=True), nullable=True),
    )

    # Unique on name + sku + url_key, checked at commit
    op.create_unique_constraint(
        'uq_products_name_sku_url_key',
        'products',
        ['name', 'sku', 'url_key'],
        deferrable=True,
        initially='DEFERRED',
    )

    # Variants table
    op.create_table(
        'variants',
        *_listing_columns(),
        sa.Column('parent_product_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('products.id', ondelete='CASCADE', name='fk_variants_parent_product_id'), nullable=False, index=True),
    )

    op.create_unique_constraint(
        'uq_variants_name_sku_url_key',
        'variants',
        ['name', 'sku', 'url_key'],
        deferrable=True,
        initially='DEFERRED',
    )


def downgrade() -> None:
    """Drop products and variants tables."""
    op.drop_table('variants')
    op.drop_table('products')
