"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from app.models.todo import PRIORITY_VALUES, Todo

__all__ = [
    "PRIORITY_VALUES",
    "Todo",
]
