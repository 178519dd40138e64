"""
todostore - Error Types
=======================
Every store operation is all-or-nothing: these are raised to the caller
immediately, nothing is retried and nothing is repaired.
"""


class TodoStoreError(Exception):
    """Base class for todostore errors"""


class ConfigurationError(TodoStoreError, ValueError):
    """Storage directory or file name is missing"""


class CorruptDataError(TodoStoreError, ValueError):
    """Store file exists but does not hold a valid JSON array of records"""

    def __init__(self, path, reason: str):
        super().__init__(f"Corrupt store file {path}: {reason}")
        self.path = path
        self.reason = reason


# OS-level failures (permissions, disk full) propagate as-is.
FilesystemError = OSError
