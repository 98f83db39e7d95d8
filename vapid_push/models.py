"""
VAPID push data models

Subscriptions, claims and key references passed between the components.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class Subscription(BaseModel):
    """Browser push subscription (the JSON a PushManager hands out)"""

    model_config = ConfigDict(extra="allow", frozen=True)

    endpoint: str | None = None
    keys: Any = None  # opaque, passed through untouched

    @classmethod
    def from_mapping(cls, data: "Subscription | Mapping[str, Any]") -> "Subscription":
        if isinstance(data, Subscription):
            return data
        return cls.model_validate(dict(data))


@dataclass(frozen=True)
class Claim:
    """Raw VAPID claim as supplied by the caller."""

    sub: Any = None
    aud: Any = None
    exp: Any = None

    @classmethod
    def from_mapping(cls, data: "Claim | Mapping[str, Any] | None") -> "Claim":
        if isinstance(data, Claim):
            return data
        data = data or {}
        return cls(sub=data.get("sub"), aud=data.get("aud"), exp=data.get("exp"))


@dataclass(frozen=True)
class ValidatedClaim:
    """Claim with sub, aud and exp all present and checked against an endpoint."""

    sub: str
    aud: str
    exp: int

    def to_dict(self) -> dict[str, Any]:
        """Claim as a mapping in JWT body order."""
        return {
            "sub": self.sub,
            "aud": self.aud,
            "exp": self.exp,
        }


@dataclass(frozen=True)
class KeyReference:
    """Reference to an EC P-256 private key in PEM format."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def of(cls, value: "KeyReference | str | Path") -> "KeyReference":
        if isinstance(value, KeyReference):
            return value
        return cls(Path(value))

    def exists(self) -> bool:
        return self.path.exists()

    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def __str__(self) -> str:
        return str(self.path)


@dataclass
class PushResponse:
    """Answer of the push service to a single POST."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    content: bytes = b""

    @property
    def success(self) -> bool:
        """Push services answer 201 Created; anything up to 202 counts as accepted."""
        return self.status <= 202


@dataclass(frozen=True)
class RawKeys:
    """Base64url encoded key pair as handed to browsers and other VAPID libraries."""

    public_key: str
    private_key: str
