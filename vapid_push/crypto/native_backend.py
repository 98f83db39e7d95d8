"""
Native Crypto Backend

Signs and derives keys in-process with the ``cryptography`` package.
"""

import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from vapid_push.crypto.base import COORDINATE_SIZE, BaseCryptoBackend, der_to_raw_signature
from vapid_push.exceptions import InvalidKeyFormat
from vapid_push.models import KeyReference

logger = logging.getLogger(__name__)


class NativeCryptoBackend(BaseCryptoBackend):
    """cryptography based backend."""

    name = "native"

    def load_private_key(self, key: KeyReference) -> ec.EllipticCurvePrivateKey:
        """Load and check a P-256 private key from its pem file."""
        self.ensure_exists(key)
        try:
            data = key.read_bytes()
        except OSError as e:
            raise InvalidKeyFormat(str(key), str(e)) from e

        try:
            private_key = serialization.load_pem_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise InvalidKeyFormat(str(key)) from e

        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise InvalidKeyFormat(str(key), "not an EC key")
        if not isinstance(private_key.curve, ec.SECP256R1):
            raise InvalidKeyFormat(str(key), f"curve {private_key.curve.name} is not prime256v1")
        return private_key

    async def sign(self, message: bytes, key: KeyReference) -> bytes:
        private_key = self.load_private_key(key)
        logger.debug("Signing %d bytes with %s", len(message), key)
        der_signature = private_key.sign(message, ec.ECDSA(hashes.SHA256()))
        return der_to_raw_signature(der_signature)

    async def public_key(self, key: KeyReference) -> bytes:
        private_key = self.load_private_key(key)
        return private_key.public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )

    async def private_value(self, key: KeyReference) -> bytes:
        private_key = self.load_private_key(key)
        return private_key.private_numbers().private_value.to_bytes(COORDINATE_SIZE, "big")
