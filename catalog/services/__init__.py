# catalog/services/__init__.py
from .search_service import SearchService, language_label

__all__ = ['SearchService', 'language_label']
