"""
VAPID key material

Public key resolution for the Authorization header, plus provisioning helpers
that create a key pair and export it in the raw base64url form browsers use.
"""

import logging
import os
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from vapid_push.core.encoding import b64url_encode
from vapid_push.crypto import BaseCryptoBackend, get_backend
from vapid_push.crypto.base import COORDINATE_SIZE, UNCOMPRESSED_POINT_SIZE
from vapid_push.exceptions import InvalidKeyFormat
from vapid_push.models import KeyReference, RawKeys

logger = logging.getLogger(__name__)

PUBLIC_KEY_FILENAME = "public_key.txt"
PRIVATE_KEY_FILENAME = "private_key.txt"


class PublicKeyResolver:
    """Derives the ``k=`` value of the Authorization header from a private key."""

    def __init__(self, backend: BaseCryptoBackend | None = None) -> None:
        self.backend = backend or get_backend()

    async def resolve(self, key: KeyReference) -> str:
        """Return the uncompressed public point of *key*, base64url without padding.

        Raises:
            KeyNotFound: the key file does not exist
            InvalidKeyFormat: the file is not an EC P-256 private key
        """
        point = await self.backend.public_key(key)
        if len(point) != UNCOMPRESSED_POINT_SIZE or point[0] != 0x04:
            raise InvalidKeyFormat(str(key), "derived public key is not an uncompressed P-256 point")
        return b64url_encode(point)


def generate_private_key(path: str | Path, overwrite: bool = False) -> KeyReference:
    """Create a new prime256v1 private key pem at *path*."""
    path = Path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists")
    path.parent.mkdir(parents=True, exist_ok=True)

    private_key = ec.generate_private_key(ec.SECP256R1())
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(pem)

    logger.info("Created VAPID private key %s", path)
    return KeyReference(path)


async def export_raw_keys(key: KeyReference, backend: BaseCryptoBackend | None = None) -> RawKeys:
    """Public point and private scalar of *key*, both base64url without padding."""
    backend = backend or get_backend()
    public_key = await PublicKeyResolver(backend).resolve(key)
    private_value = await backend.private_value(key)
    if len(private_value) != COORDINATE_SIZE:
        raise InvalidKeyFormat(str(key), "private scalar is not 32 bytes")
    return RawKeys(public_key=public_key, private_key=b64url_encode(private_value))


async def write_raw_keys(
    key: KeyReference,
    directory: str | Path | None = None,
    backend: BaseCryptoBackend | None = None,
) -> RawKeys:
    """Write public_key.txt and private_key.txt next to *key* (or into *directory*)."""
    raw = await export_raw_keys(key, backend)
    target = Path(directory) if directory is not None else key.path.parent
    target.mkdir(parents=True, exist_ok=True)

    (target / PUBLIC_KEY_FILENAME).write_text(raw.public_key + "\n", encoding="ascii")
    private_file = target / PRIVATE_KEY_FILENAME
    private_file.write_text(raw.private_key + "\n", encoding="ascii")
    private_file.chmod(0o600)

    logger.info("Extracted raw keys into %s", target)
    return raw
