"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
so Base.metadata knows every table before create_all().
"""

from models.base import Base
from models.order import Order
from models.setting import Setting

__all__ = [
    'Base',
    'Order',
    'Setting',
]
