"""CLI package for the Book Catalog"""
from .main import cli

__all__ = ['cli']
