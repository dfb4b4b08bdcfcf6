import re
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".config/api-key-manager/config"
DEFAULT_STORE_PATH = Path.home() / ".local/share/api-key-manager/keys.json"

# Header clients put their key in (lookup is case-insensitive)
DEFAULT_HEADER_NAME = "x-api-key"

# Namespace for key records inside a shared configuration store
APIKEYS_PREFIX = "APIKeys"


@dataclass(frozen=True)
class Settings:
    header_name: str = DEFAULT_HEADER_NAME
    store_path: Path = DEFAULT_STORE_PATH


def _read_value(content: str, name: str) -> str | None:
    match = re.search(rf"^\s*(?:export\s+)?{name}=(.+)$", content, re.MULTILINE)
    if not match:
        return None
    value = match.group(1).strip().strip("'\"")
    return value or None


def load_settings(config_path: Path | None = None) -> Settings:
    """Load header name and store path from config file, or return defaults."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return Settings()

    content = path.read_text()
    header_name = _read_value(content, "API_KEY_HEADER") or DEFAULT_HEADER_NAME
    store = _read_value(content, "API_KEY_STORE")
    store_path = Path(store).expanduser() if store else DEFAULT_STORE_PATH
    return Settings(header_name=header_name, store_path=store_path)
