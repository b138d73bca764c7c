"""SQLAlchemy models for the two collections plus the schema version marker."""
from __future__ import annotations

from sqlalchemy import Column, Integer, Numeric, String, Text

from .session import Base


class User(Base):
    __tablename__ = "users"

    email = Column(String(255), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    password = Column(Text, nullable=False)


class Product(Base):
    __tablename__ = "products"

    # sqlite_autoincrement keeps ids monotonic even after the highest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    # No ForeignKey: ownership is checked by the product service at write time.
    owner_email = Column(String(255), nullable=False, index=True)


class SchemaInfo(Base):
    __tablename__ = "schema_info"

    name = Column(String(64), primary_key=True)
    version = Column(Integer, nullable=False)
