"""
Command line interface for typed transactions.
"""

from .cli import ethtx

__all__ = ("ethtx",)
