# catalog_admin/db/models/brand.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from catalog_admin.db.base import Base
from catalog_admin.db.models.associations import product_brands


class Brand(Base):
    """
    Brand model. Products reference brands through the product_brands table.
    """

    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    website = Column(String(500))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    products = relationship(
        "Product", secondary=product_brands, back_populates="brands"
    )

    def __repr__(self):
        return f"<Brand(id={self.id}, name='{self.name}')>"
