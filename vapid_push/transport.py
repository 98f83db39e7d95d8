"""HTTP POST primitive used to hand push messages to a push service."""

import logging
from collections.abc import Mapping

import httpx

from vapid_push.exceptions import TransportError
from vapid_push.models import PushResponse

logger = logging.getLogger(__name__)


async def post(
    url: str,
    headers: Mapping[str, str],
    body: bytes,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PushResponse:
    """POST *body* to *url* and return whatever status the server answers.

    Connection, DNS and timeout failures raise :class:`TransportError`; HTTP
    error statuses are returned, not raised.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, headers=dict(headers), content=body)
    except httpx.TimeoutException as e:
        logger.warning("Push request to %s timed out after %ss", url, timeout)
        raise TransportError(f"Request to {url} timed out after {timeout}s", url=url, cause=e) from e
    except httpx.HTTPError as e:
        logger.warning("Push request to %s failed: %s", url, e)
        raise TransportError(f"Request to {url} failed: {e}", url=url, cause=e) from e

    return PushResponse(
        status=response.status_code,
        headers=dict(response.headers),
        body=response.text,
        content=response.content,
    )
