# catalog/sa/__init__.py
from .database import Database
from .models import Base, Edition, InventoryItem

__all__ = [
    'Database',
    'Base',
    'Edition',
    'InventoryItem'
]
