"""
src/DB/base_class.py
=================================
SQLAlchemy Base Model Definition
=================================

Declarative base shared by every model of the lab reservation service
(SQLAlchemy 2.0 style). Models that need a specific table name override
__tablename__; the default is the lower-cased class name.

Usage Example:
-------------
    from src.DB.base_class import Base
    from sqlalchemy import Column, Integer, String

    class Rack(Base):
        # Table name automatically becomes 'rack'
        id = Column(Integer, primary_key=True)
        label = Column(String(50))

Note:
    All models must inherit from this Base to be registered in
    Base.metadata, which both create_all() and Alembic rely on.
"""

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models in the application."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Lower-cased class name, e.g. Rack -> 'rack'."""
        return cls.__name__.lower()
