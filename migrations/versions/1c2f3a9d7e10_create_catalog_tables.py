"""create_catalog_tables

Revision ID: 1c2f3a9d7e10
Revises:
Create Date: 2026-10-19 09:12:31.402518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1c2f3a9d7e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create brands, categories, products and their association tables."""
    op.create_table(
        'brands',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('website', sa.String(500)),
        *_timestamps(),
    )
    op.create_index('ix_brands_name', 'brands', ['name'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column(
            'parent_id',
            sa.Integer(),
            sa.ForeignKey('categories.id', ondelete='SET NULL'),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)
    op.create_index('ix_categories_parent_id', 'categories', ['parent_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('old_price', sa.Float(), nullable=False),
        sa.Column('discount', sa.Float(), nullable=False),
        sa.Column('image_url', sa.String(500)),
        sa.Column('gender', sa.String(10), nullable=False),
        sa.Column('colors', sa.String(500), comment='Comma-joined color values'),
        sa.Column('rating', sa.Float(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "gender IN ('men', 'women', 'boy', 'girl')", name='ck_products_gender'
        ),
        sa.CheckConstraint('discount >= 0 AND discount <= 100', name='ck_products_discount'),
    )
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_price', 'products', ['price'])
    op.create_index('ix_products_gender', 'products', ['gender'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'product_categories',
        sa.Column(
            'product_id',
            sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'category_id',
            sa.Integer(),
            sa.ForeignKey('categories.id', ondelete='CASCADE'),
            primary_key=True,
        ),
    )
    op.create_index(
        'ix_product_categories_category_id', 'product_categories', ['category_id']
    )

    op.create_table(
        'product_brands',
        sa.Column(
            'product_id',
            sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'brand_id',
            sa.Integer(),
            sa.ForeignKey('brands.id', ondelete='CASCADE'),
            primary_key=True,
        ),
    )
    op.create_index('ix_product_brands_brand_id', 'product_brands', ['brand_id'])

    op.create_table(
        'product_occasions',
        sa.Column(
            'product_id',
            sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('occasion', sa.String(100), primary_key=True),
    )
    op.create_index('ix_product_occasions_occasion', 'product_occasions', ['occasion'])


def downgrade() -> None:
    """Drop all catalog tables."""
    # Association tables first
    op.drop_table('product_occasions')
    op.drop_table('product_brands')
    op.drop_table('product_categories')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_table('brands')
