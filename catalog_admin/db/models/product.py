# catalog_admin/db/models/product.py
import enum

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Float,
    ForeignKey,
    DateTime,
    CheckConstraint,
    func,
)
from sqlalchemy.orm import relationship
from catalog_admin.db.base import Base
from catalog_admin.db.models.associations import product_categories, product_brands


class Gender(str, enum.Enum):
    MEN = "men"
    WOMEN = "women"
    BOY = "boy"
    GIRL = "girl"


class Product(Base):
    """
    Product model. Price is derived from old_price and discount when the
    product is written and is stored as-is for filtering and sorting.
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint(
            "gender IN ('men', 'women', 'boy', 'girl')", name="ck_products_gender"
        ),
        CheckConstraint("discount >= 0 AND discount <= 100", name="ck_products_discount"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    price = Column(Float, nullable=False, index=True)
    old_price = Column(Float, nullable=False)
    discount = Column(Float, nullable=False, default=0)
    image_url = Column(String(500))
    gender = Column(String(10), nullable=False, index=True)
    colors = Column(String(500), comment="Comma-joined color values")
    rating = Column(Float, nullable=False, default=0.0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    categories = relationship(
        "Category", secondary=product_categories, back_populates="products"
    )
    brands = relationship("Brand", secondary=product_brands, back_populates="products")
    occasions = relationship(
        "ProductOccasion",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductOccasion.occasion",
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class ProductOccasion(Base):
    """One occasion tag of a product (e.g. 'party', 'casual')."""

    __tablename__ = "product_occasions"

    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    occasion = Column(String(100), primary_key=True, index=True)

    product = relationship("Product", back_populates="occasions")

    def __repr__(self):
        return f"<ProductOccasion(product_id={self.product_id}, occasion='{self.occasion}')>"
