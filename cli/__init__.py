"""CLI package for the library catalog bot"""
from .main import cli
from .commands.catalog import catalog

__all__ = ['cli', 'catalog']
