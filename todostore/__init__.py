"""
todostore - Persistent Todo List
================================

JSON-file record store plus a small search language for todos.

Usage:
    from todostore import TodoManager, guess_date

    manager = TodoManager("~/.todostore")
    todo = manager.create_todo("Pay bills", due_date=guess_date("tomorrow"))

    # Incomplete todos whose title contains "bills", due before next week
    manager.search("bills due:<2026-11-01")

    manager.toggle_completed(todo.id)
    manager.search("status:done")
"""

from .errors import (
    TodoStoreError,
    ConfigurationError,
    CorruptDataError,
    FilesystemError
)

from .schema import (
    Record,
    Todo,
    SearchFilter,
    new_id
)

from .store import RecordStore
from .query import guess_date, parse_search_query, filter_records
from .manager import TodoManager

__version__ = "1.0.0"
__all__ = [
    "TodoManager",
    "RecordStore",
    "Record",
    "Todo",
    "SearchFilter",
    "new_id",
    "guess_date",
    "parse_search_query",
    "filter_records",
    "TodoStoreError",
    "ConfigurationError",
    "CorruptDataError",
    "FilesystemError"
]
