"""API key validation and administration on top of a configuration store."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from .config import APIKEYS_PREFIX, DEFAULT_HEADER_NAME
from .exceptions import (
    InvalidKeyError,
    MissingKeyError,
    StoreError,
    UnknownKeyError,
)
from .models import ConfigStore, IdGenerator, KeyRecord, KeyStatus, Request, as_utc

logger = logging.getLogger(__name__)


def _uuid1() -> str:
    return str(uuid.uuid1())


class KeyManager:
    """Manages API keys and their metadata, using a configuration store as storage.

    Args:
        store: Async key-value store holding the key records.
        header_name: Request header carrying the API key.
        id_generator: Zero-argument callable minting new keys.
    """

    def __init__(
        self,
        store: ConfigStore,
        header_name: str = DEFAULT_HEADER_NAME,
        id_generator: IdGenerator = _uuid1,
    ):
        self.store = store
        self.header_name = header_name
        self.id_generator = id_generator

    async def require_existing_key(self, request: Request | None) -> KeyRecord:
        """Check that the request carries a registered API key.

        The returned record may still be inactive or expired.

        Raises:
            MissingKeyError: Header absent or blank.
            UnknownKeyError: No record stored for the key.
            StoreError: The store failed.
        """
        key = self._extract_key(request)
        if not key:
            raise MissingKeyError()

        record = await self._lookup(key)
        if self.status(record) == KeyStatus.DOES_NOT_EXIST:
            logger.debug("Rejected unknown API key")
            raise UnknownKeyError()
        return record

    async def require_valid_key(self, request: Request | None) -> KeyRecord:
        """Check that the request carries an active, unexpired API key."""
        record = await self.require_existing_key(request)
        key_status = self.status(record)
        if key_status != KeyStatus.VALID:
            logger.debug("Rejected API key issued to %s: %s", record.issuee, key_status.name)
            raise InvalidKeyError(key_status)
        return record

    def generate_key(self) -> str:
        return self.id_generator()

    async def upsert(self, key: str, record: KeyRecord) -> None:
        """Insert or update an API key along with its metadata."""
        await self._set(self.storage_key(key), record.to_dict())
        logger.info("Stored API key record %s", self.storage_key(key))

    async def delete(self, key: str) -> None:
        # Soft delete: the slot stays, an empty record reads as nonexistent
        await self._set(self.storage_key(key), {})
        logger.info("Cleared API key record %s", self.storage_key(key))

    def status(self, record: KeyRecord | None, now: datetime | None = None) -> KeyStatus:
        """Return the status of the given key record.

        Deactivation takes precedence over expiry.
        """
        if record is None or not record.issuee:
            return KeyStatus.DOES_NOT_EXIST
        if not record.is_active:
            return KeyStatus.INACTIVE
        if record.expiry_date is not None:
            now = as_utc(now) if now else datetime.now(timezone.utc)
            if as_utc(record.expiry_date) < now:
                return KeyStatus.EXPIRED
        return KeyStatus.VALID

    def storage_key(self, key: str) -> str:
        return f"{APIKEYS_PREFIX}/{key}"

    def _extract_key(self, request: Request | None) -> str | None:
        headers = getattr(request, "headers", None)
        if not headers:
            return None

        value = headers.get(self.header_name)
        if value is None:
            wanted = self.header_name.lower()
            value = next(
                (v for name, v in headers.items() if name.lower() == wanted), None
            )
        return value.strip() if value else None

    async def _lookup(self, key: str) -> KeyRecord | None:
        storage_key = self.storage_key(key)
        value = await self._get(storage_key)
        if not value:
            return None
        try:
            return KeyRecord.from_dict(value)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Malformed record at {storage_key}: {exc}") from exc

    async def _get(self, storage_key: str) -> Any:
        try:
            return await self.store.get_global_data(storage_key)
        except StoreError:
            raise
        except Exception as exc:
            raise StoreError(f"Failed to read {storage_key}: {exc}") from exc

    async def _set(self, storage_key: str, value: Any) -> None:
        try:
            await self.store.set_global_data(storage_key, value)
        except StoreError:
            raise
        except Exception as exc:
            raise StoreError(f"Failed to write {storage_key}: {exc}") from exc
