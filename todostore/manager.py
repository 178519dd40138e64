"""
todostore - Todo Manager
========================
Wires the record store, query parser and filter engine together.

The manager keeps a cached copy of every todo. The cache is loaded once at
construction and replaced from the store's change notifications, so
searches never touch the disk.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from .query import filter_records, parse_search_query
from .schema import Todo, new_id
from .store import RecordStore

logger = logging.getLogger("todostore")

DEFAULT_FILE_NAME = "todos.json"
DATE_FORMAT = "%Y/%m/%d"


class TodoManager:
    """
    Todo list backed by {data_dir}/{file_name}

    Key features:
    - Search with the query language (see todostore.query)
    - Create, edit and toggle completion of todos
    - Plain-text list rendering for the CLI
    """

    def __init__(
        self,
        data_dir: str,
        file_name: str = DEFAULT_FILE_NAME,
        id_source: Callable[[], str] = new_id
    ):
        self.id_source = id_source
        self.store: RecordStore[Todo] = RecordStore(
            Todo,
            store_directory=data_dir,
            file_name=file_name,
            on_change=self._on_store_change
        )
        self._todos: List[Todo] = self.store.fetch_all()

    @property
    def todos(self) -> List[Todo]:
        return list(self._todos)

    def refresh(self) -> List[Todo]:
        """Reload the cache from disk"""
        self._todos = self.store.fetch_all()
        return self.todos

    def _on_store_change(self, todos: List[Todo]) -> None:
        self._todos = todos

    # ========================================
    # QUERIES
    # ========================================

    def search(self, query: str = "") -> List[Todo]:
        """Todos visible for a search query"""
        search_filter = parse_search_query(query)
        logger.debug(f"🔎 {query!r} -> {search_filter}")
        return filter_records(search_filter, self._todos)

    def get_todo(self, todo_id: str) -> Optional[Todo]:
        """Get todo by ID"""
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    # ========================================
    # MUTATIONS
    # ========================================

    def create_todo(
        self,
        title: str,
        description: str = "",
        due_date: Optional[datetime] = None
    ) -> Todo:
        """Create a new incomplete todo"""
        todo = Todo(
            id=self.id_source(),
            title=title,
            description=description,
            is_completed=False,
            due_date=due_date
        )
        self.store.append(todo)

        logger.info(f"🆕 Created todo: {todo.title} ({todo.id})")
        return todo

    def edit_todo(self, todo_id: str, **changes: Any) -> Optional[Todo]:
        """Replace a todo with a copy carrying the given field changes"""
        todo = self.get_todo(todo_id)
        if not todo:
            logger.warning(f"Todo not found: {todo_id}")
            return None

        updated = Todo.model_validate({**todo.model_dump(), **changes, "id": todo.id})
        self.store.update(updated)

        logger.info(f"✏️ Saved todo: {updated.title} ({todo_id})")
        return self.get_todo(todo_id)

    def toggle_completed(self, todo_id: str) -> Optional[Todo]:
        """Mark as complete, or back to incomplete"""
        todo = self.get_todo(todo_id)
        if not todo:
            logger.warning(f"Todo not found: {todo_id}")
            return None

        return self.edit_todo(todo_id, is_completed=not todo.is_completed)

    # ========================================
    # REPORTING
    # ========================================

    @staticmethod
    def format_todo(todo: Todo) -> str:
        icon = "✅" if todo.is_completed else "⬜"
        line = f"{icon} [{todo.id}] {todo.title}"
        if todo.due_date:
            line += f"  🕒 {todo.due_date.strftime(DATE_FORMAT)}"
        return line

    def get_list_report(self, todos: List[Todo]) -> str:
        """Generate human-readable todo list"""
        if not todos:
            return "No todos found"
        return "\n".join(self.format_todo(todo) for todo in todos)

    def get_detail_report(self, todo: Todo) -> str:
        """Title, status, due date and description of one todo"""
        lines = [
            self.format_todo(todo),
            f"Status: {'completed' if todo.is_completed else 'incomplete'}",
            f"Due Date: {todo.due_date.strftime(DATE_FORMAT) if todo.due_date else '-'}",
        ]
        if todo.description:
            lines.extend(["", todo.description])
        return "\n".join(lines)
