"""
In-memory view state for a todo list client.

Mirrors what the browser page does: the list is loaded once, and every
later action patches the local copy with the record the server returns
instead of fetching the whole list again. A failed action sets a single
error message and leaves the loaded todos as they were.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.client.api import TodoApiClient, TodoApiError

logger = logging.getLogger(__name__)


def empty_draft() -> Dict[str, str]:
    return {"title": "", "description": "", "priority": "medium"}


@dataclass
class TodoListState:
    api: TodoApiClient
    todos: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: str = ""
    editing_id: Optional[int] = None
    draft: Dict[str, str] = field(default_factory=empty_draft)

    def load(self) -> None:
        self.loading = True
        try:
            self.todos = self.api.list()
            self.error = ""
        except TodoApiError as exc:
            self._fail("Failed to fetch todos", exc)
        finally:
            self.loading = False

    def add(self, title: str, description: str = "", priority: str = "medium") -> Optional[Dict[str, Any]]:
        """Create a todo and put it at the top. Blank titles are not sent."""
        if not title.strip():
            return None
        try:
            todo = self.api.create({"title": title, "description": description, "priority": priority})
        except TodoApiError as exc:
            self._fail("Failed to create todo", exc)
            return None
        self.todos = [todo] + self.todos
        self.error = ""
        return todo

    def toggle_complete(self, todo_id: int) -> None:
        current = self._find(todo_id)
        if current is None:
            return
        try:
            updated = self.api.update(todo_id, {"completed": not current["completed"]})
        except TodoApiError as exc:
            self._fail("Failed to update todo", exc)
            return
        self._replace(updated)

    def remove(self, todo_id: int) -> None:
        try:
            self.api.delete(todo_id)
        except TodoApiError as exc:
            self._fail("Failed to delete todo", exc)
            return
        self.todos = [todo for todo in self.todos if todo["id"] != todo_id]

    def start_edit(self, todo_id: int) -> None:
        todo = self._find(todo_id)
        if todo is None:
            return
        self.editing_id = todo_id
        self.draft = {
            "title": todo["title"],
            "description": todo.get("description") or "",
            "priority": todo["priority"],
        }

    def save_edit(self) -> None:
        if self.editing_id is None:
            return
        try:
            updated = self.api.update(self.editing_id, dict(self.draft))
        except TodoApiError as exc:
            # Keep editing so the draft is not lost
            self._fail("Failed to update todo", exc)
            return
        self._replace(updated)
        self.editing_id = None
        self.error = ""

    def cancel_edit(self) -> None:
        """Drop the draft. No request is made."""
        self.editing_id = None
        self.draft = empty_draft()

    @property
    def stats(self) -> Dict[str, int]:
        completed = sum(1 for todo in self.todos if todo["completed"])
        return {
            "total": len(self.todos),
            "completed": completed,
            "pending": len(self.todos) - completed,
        }

    def _find(self, todo_id: int) -> Optional[Dict[str, Any]]:
        return next((todo for todo in self.todos if todo["id"] == todo_id), None)

    def _replace(self, record: Dict[str, Any]) -> None:
        self.todos = [record if todo["id"] == record["id"] else todo for todo in self.todos]

    def _fail(self, message: str, exc: TodoApiError) -> None:
        logger.error("%s: %s", message, exc.message)
        self.error = message
