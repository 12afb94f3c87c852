"""
SQLAlchemy declarative base.

This is the foundation for all database models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every table inherits from this so that ``Base.metadata`` knows about it
    and ``Database.create_all`` can create it.
    """
    pass
