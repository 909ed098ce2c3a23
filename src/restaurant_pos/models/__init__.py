from .user import User, RoleEnum
from .table import DiningTable, TableStatusEnum
from .menu_item import MenuItem, MenuCategoryEnum
from .order import Order, OrderStatusEnum
from .order_item import OrderItem
from .payment import Payment

__all__ = [
    "User",
    "RoleEnum",
    "DiningTable",
    "TableStatusEnum",
    "MenuItem",
    "MenuCategoryEnum",
    "Order",
    "OrderStatusEnum",
    "OrderItem",
    "Payment",
]
