"""
Signed request builder for the Satispay GBusiness API

This module produces the Date, Digest and Authorization headers that
authenticate one outbound request. It never performs the network call
itself: the transport merges the returned headers and sends the exact body
that was digested here.
"""

import base64
import logging
from datetime import datetime
from typing import Callable, Dict, Optional, Union

from ..config.api_config import Credentials
from ..crypto.factory import RSAServiceFactory
from ..crypto.rsa_service import RSAService
from ..exceptions import SigningError
from .types import (
    HttpMethod,
    SignatureEnvelope,
    SigningErrorCodes,
    SigningState,
)
from .utils import (
    RequestBody,
    body_to_bytes,
    calculate_digest,
    format_http_date,
    host_from_authority,
    normalize_method,
    utc_now,
)
from .canonical_message import build_canonical_string

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class RequestSigner:
    """
    RSA-SHA256 request signer

    Each call goes UNSIGNED -> CANONICALIZING -> DIGESTING -> SIGNING ->
    ASSEMBLED. A failure at any step propagates; there is no unsigned
    fallback once signing was attempted.
    """

    def __init__(self, rsa_service: Optional[RSAService] = None, clock: Optional[Clock] = None):
        """
        Initialize the signer.

        Args:
            rsa_service: RSA backend (resolved through RSAServiceFactory if None)
            clock: Callable returning the current datetime, for tests

        Raises:
            NoBackendAvailableError: If no RSA backend is available
        """
        self.rsa_service = rsa_service or RSAServiceFactory.get()
        self.clock = clock or utc_now

    def sign(
        self,
        method: Union[str, HttpMethod],
        path: str,
        body: RequestBody,
        authority: str,
        credentials: Credentials
    ) -> SignatureEnvelope:
        """
        Sign one request.

        Args:
            method: HTTP method
            path: Request path, query string included
            body: Already serialized body, or None/'' for no body
            authority: Base URL of the API (scheme is stripped for host)
            credentials: Credentials holding private key and key id

        Returns:
            SignatureEnvelope: Signature material for the request

        Raises:
            SigningError: If credentials cannot sign or the key is unusable
        """
        # Snapshot, read once
        private_key = credentials.private_key if credentials is not None else None
        key_id = credentials.key_id if credentials is not None else None

        state = SigningState.UNSIGNED
        if not private_key:
            raise SigningError(
                "A private key is required to sign a request",
                SigningErrorCodes.INVALID_PRIVATE_KEY
            )
        if not key_id:
            raise SigningError(
                "A key id is required to sign a request",
                SigningErrorCodes.INVALID_KEY_ID
            )

        if not isinstance(path, str) or not path:
            raise SigningError("Request path cannot be empty", SigningErrorCodes.INVALID_PATH)

        state = self._advance(state, SigningState.CANONICALIZING)
        http_method = normalize_method(method)
        date = format_http_date(self.clock())
        host = host_from_authority(authority)
        body_bytes = body_to_bytes(body)

        state = self._advance(state, SigningState.DIGESTING)
        digest = calculate_digest(body_bytes)
        canonical, signed_headers = build_canonical_string(
            http_method,
            path,
            host,
            digest,
            date,
            content_length=len(body_bytes)
        )

        state = self._advance(state, SigningState.SIGNING)
        signature = self._sign_message(private_key, canonical)

        envelope = SignatureEnvelope(
            date=date,
            digest=digest,
            signature=signature,
            key_id=key_id,
            signed_headers=signed_headers,
            canonical_string=canonical,
        )
        self._advance(state, SigningState.ASSEMBLED)
        return envelope

    def build_headers(
        self,
        method: Union[str, HttpMethod],
        path: str,
        body: RequestBody,
        authority: str,
        credentials: Optional[Credentials]
    ) -> Dict[str, str]:
        """
        Build the signed header set for a request.

        Returns an empty dict when the credentials are not able to sign,
        so pre-authentication calls go out unsigned.

        Raises:
            SigningError: If signing was attempted and failed
        """
        if credentials is None or not credentials.can_sign:
            logger.debug(f"No signing credentials, sending {method} {path} unsigned")
            return {}

        return self.sign(method, path, body, authority, credentials).headers()

    def _sign_message(self, private_key: str, canonical: str) -> str:
        try:
            signature_bytes = self.rsa_service.sign(private_key, canonical.encode('utf-8'))
        except SigningError:
            raise
        except Exception as e:
            raise SigningError(
                f"Message signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            ) from e

        return base64.b64encode(signature_bytes).decode('ascii')

    def _advance(self, current: SigningState, target: SigningState) -> SigningState:
        logger.debug(f"Request signer: {current.value} -> {target.value}")
        return target


def build_signed_headers_sync(
    method: Union[str, HttpMethod],
    path: str,
    serialized_body: RequestBody,
    authority: str,
    credentials: Optional[Credentials],
    *,
    rsa_service: Optional[RSAService] = None,
    clock: Optional[Clock] = None
) -> Dict[str, str]:
    """
    Build signed headers for one request.

    Args:
        method: HTTP method
        path: Request path including query string
        serialized_body: Body exactly as it will be sent
        authority: API base URL
        credentials: Active credentials (unsigned pass-through if unable to sign)
        rsa_service: Optional RSA backend override
        clock: Optional clock override

    Returns:
        dict: Date, Digest and Authorization headers, or {} when unsigned
    """
    signer = RequestSigner(rsa_service=rsa_service, clock=clock)
    return signer.build_headers(method, path, serialized_body, authority, credentials)


async def build_signed_headers(
    method: Union[str, HttpMethod],
    path: str,
    serialized_body: RequestBody,
    authority: str,
    credentials: Optional[Credentials],
    *,
    rsa_service: Optional[RSAService] = None,
    clock: Optional[Clock] = None
) -> Dict[str, str]:
    """
    Async variant of build_signed_headers_sync.

    Signing is CPU bound and does not suspend; the coroutine form lets it sit
    inside an async request flow.
    """
    return build_signed_headers_sync(
        method,
        path,
        serialized_body,
        authority,
        credentials,
        rsa_service=rsa_service,
        clock=clock,
    )
