"""
Utility functions for request signing

This module provides the small, pure building blocks of a signed request:
HTTP-date formatting, body digest calculation, host derivation and body
length measurement.
"""

import base64
import hashlib
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Dict, Mapping, Optional, Union

from ..exceptions import SigningError
from .types import DIGEST_PREFIX, HttpMethod, SigningErrorCodes

RequestBody = Optional[Union[str, bytes]]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def format_http_date(dt: Optional[datetime] = None) -> str:
    """
    Format a datetime as an RFC 7231 IMF-fixdate.

    Args:
        dt: Datetime to format (uses current time if None). Naive values
            are taken as UTC.

    Returns:
        str: e.g. 'Tue, 15 Jan 2024 10:30:00 GMT'
    """
    if dt is None:
        dt = utc_now()
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return format_datetime(dt, usegmt=True)


def body_to_bytes(body: RequestBody) -> bytes:
    """
    Get the raw bytes of a serialized body.

    Args:
        body: Serialized body, or None for no body

    Returns:
        bytes: UTF-8 bytes of the body (empty for None)

    Raises:
        SigningError: If body is not str, bytes or None
    """
    if body is None:
        return b''
    if isinstance(body, str):
        return body.encode('utf-8')
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)

    raise SigningError(
        f"Body must be an already serialized string, got {type(body).__name__}",
        SigningErrorCodes.INVALID_BODY
    )


def body_byte_length(body: RequestBody) -> int:
    """Byte length of the serialized body (not its character count)"""
    return len(body_to_bytes(body))


def calculate_digest(body: RequestBody) -> str:
    """
    Calculate the Digest header value for a body.

    An empty or missing body is digested as the empty byte sequence.

    Args:
        body: Serialized request body

    Returns:
        str: 'SHA-256=' followed by the base64 SHA-256 of the body bytes
    """
    digest = hashlib.sha256(body_to_bytes(body)).digest()
    return DIGEST_PREFIX + base64.b64encode(digest).decode('ascii')


def host_from_authority(authority: str) -> str:
    """
    Derive the signed host value from an authority URL.

    Only a leading 'https://' is removed. Ports and paths are kept as given.
    """
    if authority.startswith('https://'):
        return authority[len('https://'):]
    return authority


def normalize_method(method: Union[str, HttpMethod]) -> str:
    """
    Normalize an HTTP method to its upper case name.

    Raises:
        SigningError: If method is empty or not a string
    """
    if isinstance(method, HttpMethod):
        return method.value

    if not isinstance(method, str) or not method.strip():
        raise SigningError("HTTP method cannot be empty", SigningErrorCodes.INVALID_METHOD)

    return method.strip().upper()


def merge_headers(base: Mapping[str, str], override: Mapping[str, str]) -> Dict[str, str]:
    """
    Merge two header maps, letting override win on case-insensitive collisions.

    Args:
        base: Headers that may be replaced
        override: Headers that take precedence

    Returns:
        dict: New merged header map
    """
    overridden = {name.lower() for name in override}
    merged = {name: value for name, value in base.items() if name.lower() not in overridden}
    merged.update(override)
    return merged
