from .claims import DEFAULT_EXPIRY_SECONDS, MAX_EXPIRY_SECONDS, validate_claim
from .dispatcher import PushDispatcher, authorization_header, get_endpoint, send_push, send_push_sync
from .encoding import b64url_decode, b64url_encode, encode_compact_json
from .keys import PublicKeyResolver, export_raw_keys, generate_private_key, write_raw_keys
from .token import JWT_HEADER, JWTBuilder

__all__ = [
    "DEFAULT_EXPIRY_SECONDS",
    "MAX_EXPIRY_SECONDS",
    "JWT_HEADER",
    "JWTBuilder",
    "PublicKeyResolver",
    "PushDispatcher",
    "authorization_header",
    "b64url_decode",
    "b64url_encode",
    "encode_compact_json",
    "export_raw_keys",
    "generate_private_key",
    "get_endpoint",
    "send_push",
    "send_push_sync",
    "validate_claim",
    "write_raw_keys",
]
