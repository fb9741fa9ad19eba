"""
Adapters package for the Inventory Adaptor.

This package contains components for integrating with external APIs, including:
- Abstract interfaces that define the connector contract
- Concrete connector implementations for specific platforms
- Link header pagination shared by list endpoints
"""

from . import interfaces

from .pagination import Pagination, extract_pagination

__all__ = [
    'interfaces',
    'Pagination',
    'extract_pagination',
]
