"""
VAPID claim validation

Fills in ``aud`` and ``exp`` when missing and checks ``sub`` and ``aud``
against the push endpoint (RFC 8292 section 2).
"""

import logging
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import SplitResult, urlsplit

from vapid_push.exceptions import InvalidClaim
from vapid_push.models import Claim, ValidatedClaim

logger = logging.getLogger(__name__)

# Tokens may live at most 24 hours
MAX_EXPIRY_SECONDS = 60 * 60 * 24
# Replacement lifetime for missing or out of range expiries (~23.6 hours)
DEFAULT_EXPIRY_SECONDS = 59 * 60 * 24


def validate_claim(
    claim: Claim | Mapping[str, Any] | None,
    endpoint: str,
    now: int | None = None,
) -> ValidatedClaim:
    """Return a complete claim for *endpoint* or raise :class:`InvalidClaim`.

    - ``sub`` must be a ``mailto:`` URI.
    - ``aud`` defaults to the endpoint origin; when given, its scheme, host and
      port must equal the endpoint's.
    - ``exp`` is replaced by ``now + DEFAULT_EXPIRY_SECONDS`` when it is
      missing, not an integer, not in the future or more than
      ``MAX_EXPIRY_SECONDS`` ahead.
    """
    claim = Claim.from_mapping(claim)
    if now is None:
        now = int(time.time())

    sub = _validate_sub(claim.sub)

    endpoint_parts = _split(endpoint, "endpoint")
    if claim.aud is None:
        aud = _origin(endpoint_parts)
    else:
        aud = _validate_aud(claim.aud, endpoint_parts)

    exp = _parse_exp(claim.exp)
    if exp is None or exp <= now or exp > now + MAX_EXPIRY_SECONDS:
        if claim.exp is not None:
            logger.debug("Replacing out of range exp %r", claim.exp)
        exp = now + DEFAULT_EXPIRY_SECONDS

    return ValidatedClaim(sub=sub, aud=aud, exp=exp)


def _validate_sub(sub: Any) -> str:
    if sub is None:
        raise InvalidClaim("claim must contain 'sub'", field="sub")
    if not isinstance(sub, str):
        raise InvalidClaim("'sub' must be of form 'mailto:...@...'", field="sub")
    try:
        scheme = urlsplit(sub).scheme
    except ValueError as e:
        raise InvalidClaim(f"'sub' is not a valid URI: {e}", field="sub") from e
    if scheme.lower() != "mailto":
        raise InvalidClaim("'sub' must be of form 'mailto:...@...'", field="sub")
    return sub


def _validate_aud(aud: Any, endpoint_parts: SplitResult) -> str:
    if not isinstance(aud, str):
        raise InvalidClaim("'aud' must be a URI", field="aud")
    aud_parts = _split(aud, "aud")
    if _port(aud_parts, "aud") != _port(endpoint_parts, "endpoint") or (
        aud_parts.scheme,
        aud_parts.hostname,
    ) != (endpoint_parts.scheme, endpoint_parts.hostname):
        raise InvalidClaim("'aud' of claim does not match endpoint", field="aud")
    return aud


def _parse_exp(exp: Any) -> int | None:
    """Integer value of *exp*, or None when it is not an integer."""
    if isinstance(exp, bool):
        return None
    if isinstance(exp, int):
        return exp
    if isinstance(exp, str):
        try:
            return int(exp.strip())
        except ValueError:
            return None
    return None


def _split(uri: str, field: str) -> SplitResult:
    try:
        return urlsplit(uri)
    except ValueError as e:
        raise InvalidClaim(f"'{field}' is not a valid URI: {e}", field=field) from e


def _port(parts: SplitResult, field: str) -> int | None:
    """Port as written in the URI; None when absent."""
    try:
        return parts.port
    except ValueError as e:
        raise InvalidClaim(f"'{field}' has an invalid port: {e}", field=field) from e


def _origin(parts: SplitResult) -> str:
    """``scheme://host[:port]/`` of an endpoint."""
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = _port(parts, "endpoint")
    if port is None:
        return f"{parts.scheme}://{host}/"
    return f"{parts.scheme}://{host}:{port}/"
