"""
Base Crypto Backend

Abstract base class for the ES256 signing and public key derivation providers.
"""

from abc import ABC, abstractmethod
from typing import Any

from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from vapid_push.exceptions import KeyNotFound
from vapid_push.models import KeyReference

# P-256 coordinates and scalars are 32 bytes
COORDINATE_SIZE = 32
# 0x04 || x || y
UNCOMPRESSED_POINT_SIZE = 1 + 2 * COORDINATE_SIZE


def der_to_raw_signature(der_signature: bytes) -> bytes:
    """Convert an ASN.1 DER ECDSA signature to the fixed size r||s form JWS requires."""
    r, s = decode_dss_signature(der_signature)
    return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")


class BaseCryptoBackend(ABC):
    """Abstract base class for crypto backends."""

    name: str = "base"

    @abstractmethod
    async def sign(self, message: bytes, key: KeyReference) -> bytes:
        """
        Sign a message with ECDSA P-256 / SHA-256.

        Args:
            message: The bytes to sign (the JWT signing input)
            key: Private key to sign with

        Returns:
            64 byte IEEE P1363 signature (r||s)
        """
        pass

    @abstractmethod
    async def public_key(self, key: KeyReference) -> bytes:
        """
        Derive the public key of a private key.

        Returns:
            65 byte uncompressed EC point
        """
        pass

    @abstractmethod
    async def private_value(self, key: KeyReference) -> bytes:
        """
        Read the private scalar of a private key.

        Returns:
            32 byte big endian scalar
        """
        pass

    def ensure_exists(self, key: KeyReference) -> None:
        """Raise KeyNotFound when the key file is missing."""
        if not key.exists():
            raise KeyNotFound(str(key))

    async def cleanup(self) -> None:
        """Release backend resources."""
        return None

    async def __aenter__(self) -> "BaseCryptoBackend":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.cleanup()
