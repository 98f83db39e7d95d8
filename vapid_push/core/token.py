"""ES256 signed JWT construction for VAPID."""

import logging

from vapid_push.core.encoding import b64url_encode, encode_compact_json
from vapid_push.crypto import BaseCryptoBackend, get_backend
from vapid_push.exceptions import KeyMaterialError, SigningFailed
from vapid_push.models import KeyReference, ValidatedClaim

logger = logging.getLogger(__name__)

# The JWT header never changes for VAPID
JWT_HEADER = '{"typ":"JWT","alg":"ES256"}'


class JWTBuilder:
    """Builds ``header.body.signature`` tokens from validated claims."""

    def __init__(self, backend: BaseCryptoBackend | None = None) -> None:
        self.backend = backend or get_backend()

    @staticmethod
    def signing_input(claim: ValidatedClaim) -> str:
        """base64url(header) "." base64url(body), deterministic for a claim."""
        header = b64url_encode(JWT_HEADER)
        body = b64url_encode(encode_compact_json(claim.to_dict()))
        return f"{header}.{body}"

    async def build(self, claim: ValidatedClaim, key: KeyReference) -> str:
        """Sign *claim* with *key* and return the compact JWT.

        Any signing problem, including a missing or unreadable key, raises
        :class:`SigningFailed` chained to the original error.
        """
        signing_input = self.signing_input(claim)
        signature = await self.sign(signing_input, key)
        return f"{signing_input}.{signature}"

    async def sign(self, signing_input: str, key: KeyReference) -> str:
        """base64url r||s signature of *signing_input*."""
        try:
            signature = await self.backend.sign(signing_input.encode("ascii"), key)
        except KeyMaterialError as e:
            raise SigningFailed(f"Cannot sign with {key}: {e}", cause=e) from e
        except SigningFailed:
            raise
        except Exception as e:
            logger.exception("Signing with %s backend failed", self.backend.name)
            raise SigningFailed(f"Signing with {self.backend.name} backend failed: {e}", cause=e) from e
        return b64url_encode(signature)
