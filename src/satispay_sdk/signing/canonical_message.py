"""
Canonical message construction for the Satispay Signature scheme

The remote verifier rebuilds the same text from the received request, so the
line order and the set of lines must match what is sent byte for byte.
"""

from typing import List, Optional, Sequence, Tuple

from .types import (
    SIGNATURE_ALGORITHM,
    JSON_CONTENT_TYPE,
    REQUEST_TARGET,
    HOST,
    CONTENT_TYPE,
    CONTENT_LENGTH,
    DIGEST,
    DATE,
)


def build_canonical_string(
    method: str,
    path: str,
    host: str,
    digest: str,
    date: str,
    content_length: Optional[int] = None
) -> Tuple[str, Tuple[str, ...]]:
    """
    Build the text that gets signed.

    Lines are '<name>: <value>', joined by '\\n' with no trailing newline, in
    the order (request-target), host, [content-type, content-length], digest,
    date. The content lines are only present for a non-empty body.

    Args:
        method: HTTP method (lower cased in the request target)
        path: Request path including any query string
        host: Authority without scheme
        digest: Digest header value
        date: Date header value
        content_length: Body byte length, None or 0 when there is no body

    Returns:
        Tuple of the canonical string and the pseudo-header names it covers
    """
    lines: List[Tuple[str, str]] = [
        (REQUEST_TARGET, f"{method.lower()} {path}"),
        (HOST, host),
    ]

    if content_length:
        lines.append((CONTENT_TYPE, JSON_CONTENT_TYPE))
        lines.append((CONTENT_LENGTH, str(content_length)))

    lines.append((DIGEST, digest))
    lines.append((DATE, date))

    canonical = '\n'.join(f"{name}: {value}" for name, value in lines)
    return canonical, tuple(name for name, _ in lines)


def extract_signed_headers(canonical_string: str) -> Tuple[str, ...]:
    """
    Extract the pseudo-header names from a canonical string.

    Args:
        canonical_string: Text produced by build_canonical_string

    Returns:
        Pseudo-header names in order of appearance
    """
    names = []
    for line in canonical_string.split('\n'):
        name, sep, _ = line.partition(': ')
        if sep:
            names.append(name)
    return tuple(names)


def build_authorization_header(
    key_id: str,
    signed_headers: Sequence[str],
    signature: str,
    algorithm: str = SIGNATURE_ALGORITHM
) -> str:
    """
    Format the Authorization header value.

    Args:
        key_id: Key identifier
        signed_headers: Pseudo-header names, in the order they were signed
        signature: Base64 encoded signature

    Returns:
        str: 'Signature keyId="..", algorithm="..", headers="..", signature=".."'
    """
    headers_list = ' '.join(signed_headers)
    return (
        f'Signature keyId="{key_id}", algorithm="{algorithm}", '
        f'headers="{headers_list}", signature="{signature}"'
    )
