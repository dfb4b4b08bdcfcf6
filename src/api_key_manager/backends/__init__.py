from .memory import InMemoryConfigStore
from .json_file import JsonFileConfigStore

__all__ = ["InMemoryConfigStore", "JsonFileConfigStore"]
