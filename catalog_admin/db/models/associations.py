# catalog_admin/db/models/associations.py
from sqlalchemy import Table, Column, ForeignKey, Integer
from catalog_admin.db.base import Base

# Product to Category many-to-many association
product_categories = Table(
    'product_categories',
    Base.metadata,
    Column('product_id', Integer, ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
    Column('category_id', Integer, ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True, index=True)
)

# Product to Brand many-to-many association
product_brands = Table(
    'product_brands',
    Base.metadata,
    Column('product_id', Integer, ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
    Column('brand_id', Integer, ForeignKey('brands.id', ondelete='CASCADE'), primary_key=True, index=True)
)
