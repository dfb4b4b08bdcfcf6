import copy
from typing import Any


class InMemoryConfigStore:
    """ConfigStore kept in a dict; handy for tests and single-process hosts."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self.data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get_global_data(self, key: str) -> Any:
        return copy.deepcopy(self.data.get(key))

    async def set_global_data(self, key: str, value: Any) -> None:
        self.data[key] = copy.deepcopy(value)
