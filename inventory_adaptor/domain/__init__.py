"""
Domain package for the Inventory Adaptor.

Holds the typed records and query options exchanged with the platform.
The domain layer knows nothing about transport.
"""
