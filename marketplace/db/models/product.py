import uuid

from sqlalchemy import Column, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from marketplace.db.base import Base
from marketplace.db.models.category import product_categories


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    price = Column(Float, nullable=False)
    brand = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    weight = Column(Float, nullable=False, default=0)
    shop_id = Column(String(36), ForeignKey("shops.id"), nullable=False, index=True)

    # Relationships
    shop = relationship("Shop", back_populates="products")
    categories = relationship(
        "Category", secondary=product_categories, back_populates="products", lazy="selectin"
    )
    images = relationship(
        "ProductImage", back_populates="product", cascade="all, delete-orphan", lazy="selectin"
    )
    # Deleting a product drops it from carts but keeps order history
    cart_items = relationship("CartItem", back_populates="product", cascade="all, delete-orphan")
    order_items = relationship("OrderItem", back_populates="product")


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    image_url = Column(String(1000), nullable=False)
    image_type = Column(String(50), nullable=True)
    description = Column(String(500), nullable=True)

    product = relationship("Product", back_populates="images")
