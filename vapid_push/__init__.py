"""
VAPID Web Push sender

Signs RFC 8292 VAPID tokens and delivers push messages to push services.
"""

from vapid_push.core import (
    JWTBuilder,
    PublicKeyResolver,
    PushDispatcher,
    encode_compact_json,
    export_raw_keys,
    generate_private_key,
    send_push,
    send_push_sync,
    validate_claim,
    write_raw_keys,
)
from vapid_push.crypto import BaseCryptoBackend, NativeCryptoBackend, OpenSSLCryptoBackend, get_backend
from vapid_push.exceptions import (
    InvalidClaim,
    InvalidKeyFormat,
    KeyMaterialError,
    KeyNotFound,
    MissingEndpoint,
    PushRejected,
    SigningFailed,
    TransportError,
    VapidPushError,
)
from vapid_push.models import Claim, KeyReference, PushResponse, RawKeys, Subscription, ValidatedClaim

__all__ = [
    # Entry points
    "send_push",
    "send_push_sync",
    "PushDispatcher",
    # Components
    "validate_claim",
    "encode_compact_json",
    "JWTBuilder",
    "PublicKeyResolver",
    "generate_private_key",
    "export_raw_keys",
    "write_raw_keys",
    # Backends
    "BaseCryptoBackend",
    "NativeCryptoBackend",
    "OpenSSLCryptoBackend",
    "get_backend",
    # Data models
    "Subscription",
    "Claim",
    "ValidatedClaim",
    "KeyReference",
    "PushResponse",
    "RawKeys",
    # Errors
    "VapidPushError",
    "MissingEndpoint",
    "InvalidClaim",
    "KeyMaterialError",
    "KeyNotFound",
    "InvalidKeyFormat",
    "SigningFailed",
    "TransportError",
    "PushRejected",
]
