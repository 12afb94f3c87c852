"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.envelope import Envelope, error_payload, success_payload
from app.schemas.todo import Priority, TodoCreate, TodoRead, TodoUpdate

__all__ = [
    # Envelope
    "Envelope", "error_payload", "success_payload",
    # Todo
    "Priority", "TodoCreate", "TodoUpdate", "TodoRead",
]
