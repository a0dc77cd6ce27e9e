"""Exception types raised by the task store and API."""


class TaskApiError(Exception):
    """Base class for task API errors."""


class StorageError(TaskApiError):
    """The data file could not be read or written."""
