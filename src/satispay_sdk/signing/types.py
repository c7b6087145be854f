"""
Type definitions for request signing functionality

This module provides the enums, constants and data classes used by the
RSA-SHA256 `Signature` authentication scheme spoken by the Satispay
GBusiness API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


SIGNATURE_ALGORITHM = "rsa-sha256"
DIGEST_PREFIX = "SHA-256="
JSON_CONTENT_TYPE = "application/json"

# Pseudo-header names, in canonical order
REQUEST_TARGET = "(request-target)"
HOST = "host"
CONTENT_TYPE = "content-type"
CONTENT_LENGTH = "content-length"
DIGEST = "digest"
DATE = "date"

# Wire header names
HEADER_DATE = "Date"
HEADER_DIGEST = "Digest"
HEADER_AUTHORIZATION = "Authorization"
SIGNED_HEADER_NAMES = (HEADER_DATE, HEADER_DIGEST, HEADER_AUTHORIZATION)


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class SigningState(str, Enum):
    """Per-call progress of the request signer"""
    UNSIGNED = "unsigned"
    CANONICALIZING = "canonicalizing"
    DIGESTING = "digesting"
    SIGNING = "signing"
    ASSEMBLED = "assembled"


@dataclass(frozen=True)
class SignatureEnvelope:
    """
    Signature material produced for a single request

    Attributes:
        date: HTTP-date sent as the Date header and signed
        digest: Digest header value (SHA-256=<base64>)
        signature: Base64 encoded RSA-SHA256 signature
        key_id: Key identifier the server verifies against
        signed_headers: Pseudo-header names covered, in signing order
        canonical_string: Exact text that was signed
        algorithm: Signature algorithm tag
    """
    date: str
    digest: str
    signature: str
    key_id: str
    signed_headers: Tuple[str, ...]
    canonical_string: str
    algorithm: str = SIGNATURE_ALGORITHM

    def __post_init__(self):
        """Validate envelope"""
        if not self.signature:
            raise ValueError("Signature cannot be empty")

        if not self.key_id:
            raise ValueError("Key ID cannot be empty")

    @property
    def authorization(self) -> str:
        from .canonical_message import build_authorization_header
        return build_authorization_header(self.key_id, self.signed_headers, self.signature, self.algorithm)

    def headers(self) -> Dict[str, str]:
        """Headers to merge into the outgoing request"""
        return {
            HEADER_DATE: self.date,
            HEADER_DIGEST: self.digest,
            HEADER_AUTHORIZATION: self.authorization,
        }


# Common signing error codes
class SigningErrorCodes:
    """Standard error codes for signing operations"""

    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    INVALID_KEY_ID = "INVALID_KEY_ID"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_PATH = "INVALID_PATH"
    INVALID_BODY = "INVALID_BODY"
    SIGNING_FAILED = "SIGNING_FAILED"
