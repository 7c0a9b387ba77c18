# app/models/catalog.py
"""
Read-only catalogue tables (products, cities, tours, bookings)

The service never writes to these tables.
"""

from sqlalchemy import Column, Integer, String, Text
from .base import Base


class City(Base):
    __tablename__ = "cities_city"
    __table_args__ = {"schema": "public"}

    id = Column(Integer, primary_key=True)
    name = Column(String(200))
    name_en = Column(String(200))
    description = Column(Text)
    description_en = Column(Text)
    country = Column(String(100))
    slug = Column(String(200))
    slug_en = Column(String(200))


class Product(Base):
    __tablename__ = "products_product"
    __table_args__ = {"schema": "main"}

    id = Column(Integer, primary_key=True)
    title = Column(String(300))
    title_en = Column(String(300))
    short_description = Column(Text)
    short_description_en = Column(Text)
    long_description = Column(Text)
    long_description_en = Column(Text)
    slug = Column(String(300))
    slug_en = Column(String(300))
    city_id = Column(Integer)


class Tour(Base):
    __tablename__ = "tours_tour"
    __table_args__ = {"schema": "main"}

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer)


class Booking(Base):
    __tablename__ = "bookings_booking"
    __table_args__ = {"schema": "main"}

    id = Column(Integer, primary_key=True)
    tour_id = Column(Integer)


class BookingItem(Base):
    __tablename__ = "bookings_bookingitem"
    __table_args__ = {"schema": "main"}

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer)
