"""Task List API: a small task list served over HTTP and stored in a JSON file."""

__version__ = "1.0.0"
