from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping, Protocol
from abc import abstractmethod


IdGenerator = Callable[[], str]


class KeyStatus(Enum):
    DOES_NOT_EXIST = 0
    INACTIVE = 1
    EXPIRED = 2
    VALID = 3


def as_utc(value: datetime) -> datetime:
    """Return an aware datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class KeyRecord:
    """Metadata stored for a single API key."""

    issuee: str | None = None
    is_active: bool = True
    expiry_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"isActive": self.is_active}
        if self.issuee is not None:
            data["issuee"] = self.issuee
        if self.expiry_date is not None:
            data["expiryDate"] = as_utc(self.expiry_date).isoformat()
        return data

    @classmethod
    def from_dict(cls, value: "Mapping[str, Any] | KeyRecord") -> "KeyRecord":
        """Build a record from its stored shape.

        Raises:
            TypeError: ``value`` is not a mapping, or a field has the wrong type.
            ValueError: ``expiryDate`` is not an ISO-8601 timestamp.
        """
        if isinstance(value, KeyRecord):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Expected a mapping, got {type(value).__name__}")

        issuee = value.get("issuee") or None
        if issuee is not None and not isinstance(issuee, str):
            raise TypeError(f"issuee must be a string, got {type(issuee).__name__}")

        expiry = value.get("expiryDate")
        if isinstance(expiry, str):
            # fromisoformat only accepts a trailing "Z" from 3.11 on
            if expiry.endswith(("Z", "z")):
                expiry = expiry[:-1] + "+00:00"
            expiry = datetime.fromisoformat(expiry)
        elif expiry is not None and not isinstance(expiry, datetime):
            raise TypeError(
                f"expiryDate must be an ISO-8601 string, got {type(expiry).__name__}"
            )
        if expiry is not None:
            expiry = as_utc(expiry)

        return cls(
            issuee=issuee,
            is_active=bool(value.get("isActive", True)),
            expiry_date=expiry,
        )


class ConfigStore(Protocol):
    @abstractmethod
    async def get_global_data(self, key: str) -> Any: ...

    @abstractmethod
    async def set_global_data(self, key: str, value: Any) -> None: ...


class Request(Protocol):
    headers: Mapping[str, str]


@dataclass(frozen=True)
class HeaderRequest:
    """Minimal request carrying only headers (CLI checks, tests)."""

    headers: Mapping[str, str] = field(default_factory=dict)
