"""Database models package."""

from .user import User
from .category import Category
from .product import Product
from .cart import CartItem
from .order import Order, OrderItem
from .custom_request import CustomOrderRequest
from .review import Review
from .status import OrderStatus, RequestStatus

__all__ = [
    'User',
    'Category',
    'Product',
    'CartItem',
    'Order',
    'OrderItem',
    'CustomOrderRequest',
    'Review',
    'OrderStatus',
    'RequestStatus',
]
