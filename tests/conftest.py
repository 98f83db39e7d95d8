"""Shared fixtures: throwaway VAPID keys written to tmp_path."""

from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from vapid_push.core.encoding import b64url_encode
from vapid_push.crypto import NativeCryptoBackend
from vapid_push.models import KeyReference


def _write_pem(path: Path, private_key: ec.EllipticCurvePrivateKey, fmt: serialization.PrivateFormat) -> Path:
    path.write_bytes(
        private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=fmt,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def private_key_file(tmp_path: Path, ec_private_key: ec.EllipticCurvePrivateKey) -> Path:
    """PKCS8 pem, the format generate_private_key writes."""
    return _write_pem(tmp_path / "prime256v1_key.pem", ec_private_key, serialization.PrivateFormat.PKCS8)


@pytest.fixture
def sec1_private_key_file(tmp_path: Path, ec_private_key: ec.EllipticCurvePrivateKey) -> Path:
    """'BEGIN EC PRIVATE KEY' pem, the format `openssl ecparam -genkey` writes."""
    return _write_pem(tmp_path / "ecparam_key.pem", ec_private_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture
def p384_key_file(tmp_path: Path) -> Path:
    key = ec.generate_private_key(ec.SECP384R1())
    return _write_pem(tmp_path / "secp384r1_key.pem", key, serialization.PrivateFormat.PKCS8)


@pytest.fixture
def public_key_file(tmp_path: Path, ec_private_key: ec.EllipticCurvePrivateKey) -> Path:
    """A derived public_key.txt, which must never be accepted as a private key."""
    point = ec_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    path = tmp_path / "public_key.txt"
    path.write_text(b64url_encode(point) + "\n")
    return path


@pytest.fixture
def key_ref(private_key_file: Path) -> KeyReference:
    return KeyReference(private_key_file)


@pytest.fixture
def expected_public_key(ec_private_key: ec.EllipticCurvePrivateKey) -> str:
    point = ec_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return b64url_encode(point)


@pytest.fixture
def native_backend() -> NativeCryptoBackend:
    return NativeCryptoBackend()
