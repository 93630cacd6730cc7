# catalog/sa/models/__init__.py
from .base import Base
from .edition import Edition
from .inventory import InventoryItem

__all__ = [
    'Base',
    'Edition',
    'InventoryItem'
]
