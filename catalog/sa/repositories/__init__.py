# catalog/sa/repositories/__init__.py
from .edition import EditionRepository, to_prefix_tsquery

__all__ = ['EditionRepository', 'to_prefix_tsquery']
