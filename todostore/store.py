"""
todostore - Record Store
========================
File-backed collection of records keyed by id.

One JSON file holds the whole collection as an array. Every mutation is a
full read-modify-write of that file followed by a change notification to
subscribers. Single process, single writer: there is no locking, and two
processes writing the same file lose updates (last writer wins).
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError

from .errors import ConfigurationError, CorruptDataError
from .schema import Record

logger = logging.getLogger("todostore")

R = TypeVar("R", bound=Record)
ChangeCallback = Callable[[List[R]], None]


class RecordStore(Generic[R]):
    """
    Persistent list of records of one type.

    File: {store_directory}/{file_name}

    The directory and file are created on demand, so every operation is
    safe to call before anything exists on disk.
    """

    def __init__(
        self,
        record_type: Type[R],
        store_directory: Optional[str],
        file_name: Optional[str],
        on_change: Optional[ChangeCallback] = None
    ):
        self.record_type = record_type
        self.store_directory = store_directory
        self.file_name = file_name
        self._subscribers: List[ChangeCallback] = []
        if on_change:
            self.subscribe(on_change)

    # ========================================
    # SUBSCRIPTIONS
    # ========================================

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback invoked with the full list after every write.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ========================================
    # PUBLIC OPERATIONS
    # ========================================

    @property
    def file_path(self) -> Path:
        """Full path of the backing file"""
        if not self.store_directory:
            raise ConfigurationError("store_directory is not set")
        if not self.file_name:
            raise ConfigurationError("file_name is not set")
        return Path(self.store_directory).expanduser() / self.file_name

    def fetch_all(self) -> List[R]:
        """Return every stored record, initializing the file if needed"""
        self._initialize()
        return self._read()

    def append(self, record: R) -> List[R]:
        """Append a record. Id uniqueness is the caller's responsibility."""
        self._initialize()

        records = self._read()
        records.append(record)
        self._write(records)

        logger.debug(f"➕ Appended record {record.id} ({len(records)} total)")
        return records

    def update(self, record: R) -> List[R]:
        """Replace every record sharing record.id; the stored id is kept.

        An unknown id leaves the list unchanged (it is still rewritten).
        """
        self._initialize()

        records = []
        matched = 0
        for item in self._read():
            if item.id == record.id:
                records.append(record.model_copy(update={"id": item.id}))
                matched += 1
            else:
                records.append(item)

        self._write(records)

        if matched:
            logger.debug(f"✏️ Updated record {record.id}")
        else:
            logger.debug(f"Update skipped, no record with id {record.id}")
        return records

    # ========================================
    # FILE HANDLING
    # ========================================

    def _initialize(self) -> None:
        """Create the directory and seed an empty array if the file is missing or empty"""
        file_path = self.file_path
        file_path.parent.mkdir(parents=True, exist_ok=True)

        if not file_path.exists() or file_path.stat().st_size == 0:
            self._dump([], file_path)
            logger.debug(f"📂 Initialized store file: {file_path}")

    def _read(self) -> List[R]:
        file_path = self.file_path
        with open(file_path, "r", encoding="utf-8") as f:
            raw = f.read()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptDataError(file_path, f"invalid JSON ({e})") from e

        if not isinstance(data, list):
            raise CorruptDataError(file_path, f"expected a JSON array, got {type(data).__name__}")

        try:
            return [self.record_type.model_validate(item) for item in data]
        except ValidationError as e:
            raise CorruptDataError(file_path, f"invalid record ({e.error_count()} errors)") from e

    def _write(self, records: List[R]) -> None:
        data = [record.model_dump(mode="json", by_alias=True) for record in records]
        self._dump(data, self.file_path)

        for callback in list(self._subscribers):
            callback(list(records))

    @staticmethod
    def _dump(data: List[Any], file_path: Path) -> None:
        """Write to a sibling temp file, then swap it into place"""
        fd, tmp = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, file_path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
