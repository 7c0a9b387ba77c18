# app/models/__init__.py
"""
Models package
Read-only catalogue tables and the engine factory
"""

from .base import Base, create_catalog_engine, create_session_factory
from .catalog import City, Product, Tour, Booking, BookingItem

__all__ = [
    "Base",
    "create_catalog_engine",
    "create_session_factory",
    "City",
    "Product",
    "Tour",
    "Booking",
    "BookingItem"
]
