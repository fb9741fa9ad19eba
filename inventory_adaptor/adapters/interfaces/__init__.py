"""
Interfaces package for the Inventory Adaptor.

This package contains the abstract base interfaces resource bindings use
to talk to external APIs.
"""

from .connector import APIConnector, HttpMethod, ResourceT

__all__ = [
    'APIConnector',
    'HttpMethod',
    'ResourceT',
]
