"""
Adapters package - External service connections.
Chat-completion API, web page fetching and blob storage.
"""

from adapters import file_storage, openai_adapter, webpage_adapter

__all__ = [
    "file_storage",
    "openai_adapter",
    "webpage_adapter",
]
