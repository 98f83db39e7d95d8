"""
Web Push dispatch

Validates the subscription, signs a VAPID token and POSTs the message to the
push service, one attempt per call.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from vapid_push import transport as http_transport
from vapid_push.configs import configs
from vapid_push.core.claims import validate_claim
from vapid_push.core.keys import PublicKeyResolver
from vapid_push.core.token import JWTBuilder
from vapid_push.crypto import BaseCryptoBackend, get_backend
from vapid_push.exceptions import MissingEndpoint, PushRejected
from vapid_push.models import Claim, KeyReference, Subscription

logger = logging.getLogger(__name__)


def authorization_header(jwt: str, public_key: str) -> str:
    """VAPID draft-03 Authorization header value."""
    return f"vapid t={jwt},k={public_key}"


class PushDispatcher:
    """Sends single Web Push messages signed with VAPID."""

    def __init__(
        self,
        backend: BaseCryptoBackend | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.backend = backend or get_backend()
        self.transport = transport
        self.clock = clock
        self.resolver = PublicKeyResolver(self.backend)
        self.builder = JWTBuilder(self.backend)

    async def build_headers(
        self,
        endpoint: str,
        claim: Claim | Mapping[str, Any] | None,
        key: KeyReference | str,
        ttl: int = 0,
    ) -> dict[str, str]:
        """Authorization and TTL headers for a push to *endpoint*.

        Raises the key and claim errors before anything is signed.
        """
        key = KeyReference.of(key)
        public_key = await self.resolver.resolve(key)
        validated = validate_claim(claim, endpoint, now=int(self.clock()))
        jwt = await self.builder.build(validated, key)
        logger.debug("Built VAPID token for aud=%s exp=%s", validated.aud, validated.exp)
        return {
            "Authorization": authorization_header(jwt, public_key),
            "TTL": str(ttl),
        }

    async def send(
        self,
        subscription: Subscription | Mapping[str, Any],
        data: str | bytes | None,
        claim: Claim | Mapping[str, Any] | None,
        key: KeyReference | str,
        timeout: float = 2.0,
        ttl: int = 0,
    ) -> int:
        """Send *data* to the subscription endpoint and return the push service status.

        Raises:
            MissingEndpoint: the subscription has no absolute endpoint URL
            KeyNotFound / InvalidKeyFormat: the private key is unusable
            InvalidClaim: bad ``sub`` or ``aud``
            SigningFailed: the backend could not sign the token
            TransportError: no HTTP response (DNS, connect, timeout)
            PushRejected: the push service answered with a status above 202
        """
        endpoint = get_endpoint(subscription)
        headers = await self.build_headers(endpoint, claim, key, ttl)

        body = data.encode("utf-8") if isinstance(data, str) else (data or b"")
        response = await http_transport.post(endpoint, headers, body, timeout, transport=self.transport)

        if not response.success:
            logger.warning("Push to %s rejected: %s %s", _short(endpoint), response.status, response.body[:200])
            raise PushRejected(response.status, response.body, response.headers, content=response.content)

        logger.info("Push to %s accepted (%s)", _short(endpoint), response.status)
        return response.status


def get_endpoint(subscription: Subscription | Mapping[str, Any] | None) -> str:
    """Absolute endpoint URL of *subscription* or :class:`MissingEndpoint`."""
    if subscription is None or not isinstance(subscription, (Subscription, Mapping)):
        raise MissingEndpoint()
    try:
        endpoint = Subscription.from_mapping(subscription).endpoint
    except ValidationError as e:
        raise MissingEndpoint(f"Invalid subscription: {e}") from e
    if not endpoint:
        raise MissingEndpoint()
    try:
        parts = urlsplit(endpoint)
    except ValueError as e:
        raise MissingEndpoint(f"Endpoint is not a valid URL: {endpoint}") from e
    if not parts.scheme or not parts.hostname:
        raise MissingEndpoint(f"Endpoint is not an absolute URL: {endpoint}")
    return endpoint


async def send_push(
    subscription: Subscription | Mapping[str, Any],
    data: str | bytes | None,
    claim: Claim | Mapping[str, Any] | None,
    private_key: KeyReference | str,
    timeout: float | None = None,
    ttl: int | None = None,
    backend: BaseCryptoBackend | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Send one Web Push message; ``timeout`` and ``ttl`` default to ``configs.Push``."""
    dispatcher = PushDispatcher(backend=backend, transport=transport)
    return await dispatcher.send(
        subscription,
        data,
        claim,
        private_key,
        timeout=configs.Push.Timeout if timeout is None else timeout,
        ttl=configs.Push.TTL if ttl is None else ttl,
    )


def send_push_sync(
    subscription: Subscription | Mapping[str, Any],
    data: str | bytes | None,
    claim: Claim | Mapping[str, Any] | None,
    private_key: KeyReference | str,
    timeout: float | None = None,
    ttl: int | None = None,
    backend: BaseCryptoBackend | None = None,
) -> int:
    """Blocking :func:`send_push` for scripts without an event loop."""
    return asyncio.run(send_push(subscription, data, claim, private_key, timeout, ttl, backend))


def _short(endpoint: str) -> str:
    return endpoint if len(endpoint) <= 60 else endpoint[:60] + "…"
