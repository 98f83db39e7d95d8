"""
OpenSSL Crypto Backend

Shells out to the openssl CLI for key derivation and signing, the same
commands a shell based VAPID setup uses:

    openssl ec -in key.pem -pubout -outform DER | tail -c 65
    openssl ec -in key.pem -outform DER | tail -c +8 | head -c 32
    openssl dgst -sha256 -sign key.pem
"""

import asyncio
import logging

from vapid_push.crypto.base import (
    COORDINATE_SIZE,
    UNCOMPRESSED_POINT_SIZE,
    BaseCryptoBackend,
    der_to_raw_signature,
)
from vapid_push.exceptions import InvalidKeyFormat, SigningFailed
from vapid_push.models import KeyReference

logger = logging.getLogger(__name__)

# DER SubjectPublicKeyInfo header of an id-ecPublicKey / prime256v1 key
P256_SPKI_PREFIX = bytes.fromhex("3059301306072a8648ce3d020106082a8648ce3d030107034200")
# DER ECPrivateKey header: SEQUENCE, version 1, OCTET STRING of 32 bytes
P256_SEC1_PREFIX = bytes.fromhex("30770201010420")


class OpenSSLCryptoBackend(BaseCryptoBackend):
    """openssl CLI based backend."""

    name = "openssl"

    def __init__(self, binary: str = "openssl", timeout: float = 10.0) -> None:
        """
        Initialize the backend.

        Args:
            binary: openssl executable name or path
            timeout: Seconds to wait for a single openssl invocation
        """
        self.binary = binary
        self.timeout = timeout

    async def sign(self, message: bytes, key: KeyReference) -> bytes:
        self.ensure_exists(key)
        returncode, stdout, stderr = await self._run("dgst", "-sha256", "-sign", str(key), stdin=message)
        if returncode != 0:
            raise InvalidKeyFormat(str(key), _first_line(stderr))
        try:
            return der_to_raw_signature(stdout)
        except (ValueError, OverflowError) as e:
            raise SigningFailed(f"openssl returned an unreadable signature: {e}", cause=e) from e

    async def public_key(self, key: KeyReference) -> bytes:
        self.ensure_exists(key)
        returncode, stdout, stderr = await self._run("ec", "-in", str(key), "-pubout", "-outform", "DER")
        if returncode != 0:
            raise InvalidKeyFormat(str(key), _first_line(stderr))
        if len(stdout) != len(P256_SPKI_PREFIX) + UNCOMPRESSED_POINT_SIZE or not stdout.startswith(P256_SPKI_PREFIX):
            raise InvalidKeyFormat(str(key), "not a prime256v1 key")
        return stdout[-UNCOMPRESSED_POINT_SIZE:]

    async def private_value(self, key: KeyReference) -> bytes:
        self.ensure_exists(key)
        returncode, stdout, stderr = await self._run("ec", "-in", str(key), "-outform", "DER")
        if returncode != 0:
            raise InvalidKeyFormat(str(key), _first_line(stderr))
        if not stdout.startswith(P256_SEC1_PREFIX):
            raise InvalidKeyFormat(str(key), "not a prime256v1 key")
        start = len(P256_SEC1_PREFIX)
        return stdout[start : start + COORDINATE_SIZE]

    async def _run(self, *args: str, stdin: bytes | None = None) -> tuple[int, bytes, bytes]:
        """Run openssl and return (returncode, stdout, stderr)."""
        cmd = [self.binary, *args]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to start {self.binary}: {e}")
            raise SigningFailed(f"Failed to start {self.binary}: {e}", cause=e) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(input=stdin), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            logger.warning(f"{self.binary} timed out after {self.timeout}s")
            raise SigningFailed(f"{self.binary} timed out after {self.timeout}s", cause=e) from e

        return process.returncode or 0, stdout, stderr


def _first_line(stderr: bytes) -> str | None:
    lines = stderr.decode("utf-8", errors="replace").strip().splitlines()
    return lines[0] if lines else None
