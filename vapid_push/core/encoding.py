"""Compact JSON and base64url helpers for JWT segments."""

import base64
from collections.abc import Mapping
from typing import Any


def encode_compact_json(mapping: Mapping[Any, Any]) -> str:
    """Serialize a flat mapping as compact JSON with every key and value quoted.

    ``{"a": "b", 1: 4}`` becomes ``{"a":"b","1":"4"}``. Insertion order is kept
    and nothing is trimmed or escaped: values holding ``"`` or nested
    structures produce malformed JSON, so only flat claim mappings belong here.
    """
    members = ",".join(f'"{key}":"{value}"' for key, value in mapping.items())
    return "{" + members + "}"


def b64url_encode(data: bytes | str) -> str:
    """URL-safe base64 without ``=`` padding (RFC 7515 section 2)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)
