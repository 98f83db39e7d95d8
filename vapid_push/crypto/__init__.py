"""
Crypto Backends

ES256 signing and public key derivation providers.
"""

from vapid_push.configs import configs
from vapid_push.crypto.base import BaseCryptoBackend, der_to_raw_signature
from vapid_push.crypto.native_backend import NativeCryptoBackend
from vapid_push.crypto.openssl_backend import OpenSSLCryptoBackend


def get_backend(name: str | None = None) -> BaseCryptoBackend:
    """Create the backend called *name*, defaulting to ``configs.Vapid.Backend``."""
    name = (name or configs.Vapid.Backend).lower()
    if name == NativeCryptoBackend.name:
        return NativeCryptoBackend()
    if name == OpenSSLCryptoBackend.name:
        return OpenSSLCryptoBackend(binary=configs.Vapid.OpensslBinary)
    raise ValueError(f"Unknown crypto backend: {name}")


__all__ = [
    "BaseCryptoBackend",
    "NativeCryptoBackend",
    "OpenSSLCryptoBackend",
    "der_to_raw_signature",
    "get_backend",
]
