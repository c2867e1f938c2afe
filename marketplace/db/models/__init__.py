from marketplace.db.models.role import Role, user_roles
from marketplace.db.models.location import District, Province, Ward
from marketplace.db.models.address import Address
from marketplace.db.models.user import User
from marketplace.db.models.shop import Shop
from marketplace.db.models.category import Category, product_categories
from marketplace.db.models.product import Product, ProductImage
from marketplace.db.models.cart import Cart, CartItem
from marketplace.db.models.order import Order, OrderItem, OrderStatus, Shipment, ShipmentStatus
from marketplace.db.models.payment import Payment, PaymentStatus
from marketplace.db.models.token import InvalidatedToken, PasswordResetToken

__all__ = [
    "Role",
    "user_roles",
    "Province",
    "District",
    "Ward",
    "Address",
    "User",
    "Shop",
    "Category",
    "product_categories",
    "Product",
    "ProductImage",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Shipment",
    "ShipmentStatus",
    "Payment",
    "PaymentStatus",
    "PasswordResetToken",
    "InvalidatedToken",
]
