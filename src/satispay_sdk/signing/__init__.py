"""
Satispay Python SDK - Request Signing Module

RSA-SHA256 request signatures in the `Signature` authorization scheme used
by the Satispay GBusiness API.
"""

from .types import (
    HttpMethod,
    SigningState,
    SignatureEnvelope,
    SigningErrorCodes,
    SIGNATURE_ALGORITHM,
    SIGNED_HEADER_NAMES,
)

from .utils import (
    calculate_digest,
    format_http_date,
    host_from_authority,
    body_byte_length,
    merge_headers,
)

from .canonical_message import (
    build_canonical_string,
    build_authorization_header,
    extract_signed_headers,
)

from .request_signer import (
    RequestSigner,
    build_signed_headers,
    build_signed_headers_sync,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'RequestSigner',
    'build_signed_headers',
    'build_signed_headers_sync',
    # Types
    'HttpMethod',
    'SigningState',
    'SignatureEnvelope',
    'SigningErrorCodes',
    'SIGNATURE_ALGORITHM',
    'SIGNED_HEADER_NAMES',
    # Utilities
    'calculate_digest',
    'format_http_date',
    'host_from_authority',
    'body_byte_length',
    'merge_headers',
    'build_canonical_string',
    'build_authorization_header',
    'extract_signed_headers',
]
