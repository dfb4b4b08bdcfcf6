from .models import (
    ConfigStore,
    HeaderRequest,
    IdGenerator,
    KeyRecord,
    KeyStatus,
    Request,
)
from .manager import KeyManager
from .exceptions import (
    APIKeyError,
    InvalidKeyError,
    MissingKeyError,
    StoreError,
    UnknownKeyError,
)
from .backends import InMemoryConfigStore, JsonFileConfigStore
from .config import (
    load_settings,
    Settings,
    APIKEYS_PREFIX,
    DEFAULT_HEADER_NAME,
)

__all__ = [
    "ConfigStore",
    "HeaderRequest",
    "IdGenerator",
    "KeyRecord",
    "KeyStatus",
    "Request",
    "KeyManager",
    "APIKeyError",
    "InvalidKeyError",
    "MissingKeyError",
    "StoreError",
    "UnknownKeyError",
    "InMemoryConfigStore",
    "JsonFileConfigStore",
    "load_settings",
    "Settings",
    "APIKEYS_PREFIX",
    "DEFAULT_HEADER_NAME",
]
