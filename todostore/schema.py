"""
todostore - Record Schema Definition
====================================
Persisted record types and the ephemeral search filter.

On disk a Todo looks like:
    {"id": "...", "title": "...", "description": "...",
     "isCompleted": false, "dueDate": "2026-01-28T09:00:00+09:00" | null}
"""

from datetime import datetime
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    """Generate a unique record ID"""
    return uuid.uuid4().hex[:12]


def as_local(value: Optional[datetime]) -> Optional[datetime]:
    """Attach the local timezone to naive datetimes"""
    if value is not None and value.tzinfo is None:
        return value.astimezone()
    return value


class Record(BaseModel):
    """Anything the RecordStore can persist: must carry a stable id"""
    model_config = ConfigDict(populate_by_name=True)

    id: str


class Todo(Record):
    """Individual todo item"""
    title: str
    description: str = ""           # Markdown allowed
    is_completed: bool = Field(default=False, alias="isCompleted")
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")

    @field_validator("due_date")
    @classmethod
    def _localize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_local(value)


class SearchFilter(BaseModel):
    """Structured result of parsing one search query.

    Rebuilt from scratch on every query change; never persisted.
    """
    model_config = ConfigDict(frozen=True)

    text_token: Optional[str] = None
    completion_filter: Optional[bool] = False   # None = any status
    due_date_from: Optional[datetime] = None    # exclusive
    due_date_to: Optional[datetime] = None      # exclusive

    @field_validator("due_date_from", "due_date_to")
    @classmethod
    def _localize_bounds(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_local(value)

    def matches(self, todo: Todo) -> bool:
        if self.text_token and self.text_token not in todo.title:
            return False

        if self.completion_filter is not None and todo.is_completed != self.completion_filter:
            return False

        # A todo without a due date passes both bounds
        if self.due_date_from and todo.due_date and todo.due_date <= self.due_date_from:
            return False

        if self.due_date_to and todo.due_date and todo.due_date >= self.due_date_to:
            return False

        return True
