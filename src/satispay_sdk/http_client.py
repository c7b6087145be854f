"""
HTTP client integration for Satispay GBusiness API communication

This module provides the transport used by every resource: it builds the
header set, serializes the JSON body once, signs the request and sends that
exact payload over requests (sync) or httpx (async).
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

# HTTP client imports with fallback
try:
    import requests
    REQUESTS_AVAILABLE = True
except ImportError:
    REQUESTS_AVAILABLE = False
    requests = None

# Async HTTP client support
try:
    import httpx
    HTTPX_AVAILABLE = True
except ImportError:
    HTTPX_AVAILABLE = False
    httpx = None

from .config.api_config import ApiConfig
from .crypto.rsa_service import RSAService
from .exceptions import ApiError, ServerCommunicationError, ValidationError
from .signing.request_signer import RequestSigner
from .signing.types import HttpMethod, JSON_CONTENT_TYPE
from .signing.utils import merge_headers, normalize_method

logger = logging.getLogger(__name__)

# Header constants
HEADER_OS = 'x-satispay-os'
HEADER_OS_VERSION = 'x-satispay-osv'
HEADER_APP_VERSION = 'x-satispay-appv'
HEADER_APP_NAME = 'x-satispay-appn'
HEADER_DEVICE_TYPE = 'x-satispay-devicetype'
HEADER_TRACKING_CODE = 'x-satispay-tracking-code'
HEADER_IDEMPOTENCY_KEY = 'Idempotency-Key'


def _requests_errors():
    """(timeout, connection, any request) exception classes, empty without requests"""
    if not REQUESTS_AVAILABLE:
        return (), (), ()
    exceptions = requests.exceptions
    return exceptions.Timeout, exceptions.ConnectionError, exceptions.RequestException


def _httpx_errors():
    """(timeout, any HTTP) exception classes, empty without httpx"""
    if not HTTPX_AVAILABLE:
        return (), ()
    return httpx.TimeoutException, httpx.HTTPError


def serialize_body(body: Any) -> str:
    """
    Serialize a request body to compact JSON.

    Strings are taken as already serialized and returned unchanged.

    Raises:
        ValidationError: If the body is not JSON serializable
    """
    if isinstance(body, str):
        return body

    try:
        return json.dumps(body, separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Request body is not JSON serializable: {e}", "INVALID_BODY") from e


def parse_response_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to the raw text"""
    try:
        return json.loads(text)
    except ValueError:
        return text


def build_api_error(status_code: int, data: Any) -> ApiError:
    """
    Build the error raised for a non-2xx response.

    Args:
        status_code: HTTP status
        data: Parsed response body

    Returns:
        ApiError: Error carrying status, code and request id
    """
    if isinstance(data, dict) and data.get('message') and data.get('code') and data.get('wlt'):
        return ApiError(
            f"{data['message']}, request id: {data['wlt']}",
            http_status=status_code,
            code=str(data['code']),
            request_id=str(data['wlt']),
            details={'body': data}
        )

    return ApiError(
        f"HTTP status is not 2xx: {status_code}",
        http_status=status_code,
        details={'body': data}
    )


@dataclass
class PreparedCall:
    """
    Fully prepared request, ready for the transport.

    Attributes:
        method: Upper case HTTP method
        path: Request path, query string included
        url: Absolute request URL
        headers: Final header set
        body: Serialized body that was digested, None when there is none
    """
    method: str
    path: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    @property
    def content(self) -> Optional[bytes]:
        """Body bytes put on the wire"""
        if self.body is None:
            return None
        return self.body.encode('utf-8')

    @property
    def is_signed(self) -> bool:
        return any(name.lower() == 'authorization' for name in self.headers)


class SatispayHttpClient:
    """
    HTTP client for communicating with the Satispay GBusiness API.

    One request per call: errors are mapped to SDK exceptions and never
    retried.
    """

    def __init__(
        self,
        config: ApiConfig,
        rsa_service: Optional[RSAService] = None,
        session: Optional[Any] = None
    ):
        """
        Initialize the HTTP client.

        Args:
            config: API configuration
            rsa_service: Optional RSA backend override
            session: Optional requests.Session to send sync requests with
        """
        if session is None and not REQUESTS_AVAILABLE:
            raise ServerCommunicationError(
                "HTTP client requires 'requests' package. Install with: pip install requests"
            )

        self.config = config
        self.signer = RequestSigner(rsa_service=rsa_service)
        self.session = session if session is not None else requests.Session()

        logger.debug(f"Initialized Satispay HTTP client for {config.authservices_url}")

    def _base_headers(self) -> Dict[str, str]:
        config = self.config
        return {
            'Accept': JSON_CONTENT_TYPE,
            'User-Agent': config.user_agent,
        }

    def _identification_headers(self) -> Dict[str, str]:
        config = self.config
        candidates = (
            (HEADER_OS, config.platform),
            (HEADER_OS_VERSION, config.platform_version),
            (HEADER_APP_VERSION, config.plugin_version),
            (HEADER_APP_NAME, config.plugin_name),
            (HEADER_DEVICE_TYPE, config.device_type),
            (HEADER_TRACKING_CODE, config.tracking_code),
        )
        return {name: value for name, value in candidates if value}

    def prepare(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        sign: bool = False
    ) -> PreparedCall:
        """
        Prepare a request without sending it.

        The body is serialized once. That string sets Content-Length, is
        digested and signed, and is the payload the transport sends. GET
        requests never carry a body.

        Args:
            method: HTTP method
            path: API path (may include a query string)
            body: JSON compatible body or an already serialized string
            headers: Extra headers from the caller
            sign: Sign the request when credentials allow it

        Returns:
            PreparedCall: Request ready to be sent

        Raises:
            SigningError: If signing was attempted and failed
            ValidationError: If the body cannot be serialized
        """
        http_method = normalize_method(method)
        config = self.config

        request_headers = self._base_headers()
        if headers:
            request_headers = merge_headers(request_headers, headers)
        request_headers = merge_headers(request_headers, self._identification_headers())

        serialized = None
        if body is not None and http_method != HttpMethod.GET.value:
            serialized = serialize_body(body)
            if serialized:
                request_headers = merge_headers(request_headers, {
                    'Content-Type': JSON_CONTENT_TYPE,
                    'Content-Length': str(len(serialized.encode('utf-8'))),
                })
            else:
                serialized = None

        if sign:
            signed_headers = self.signer.build_headers(
                http_method,
                path,
                serialized,
                config.authservices_url,
                config.credentials
            )
            request_headers = merge_headers(request_headers, signed_headers)

        return PreparedCall(
            method=http_method,
            path=path,
            url=config.authservices_url + path,
            headers=request_headers,
            body=serialized,
        )

    def send(self, call: PreparedCall) -> Any:
        """
        Send a prepared request synchronously.

        Returns:
            Parsed JSON body, or raw text for non JSON responses

        Raises:
            ApiError: On non-2xx responses
            ServerCommunicationError: On network errors
        """
        logger.debug(f"Making {call.method} request to {call.url}")
        timeout_errors, connection_errors, request_errors = _requests_errors()

        try:
            response = self.session.request(
                call.method,
                call.url,
                headers=call.headers,
                data=call.content,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except timeout_errors as e:
            raise ServerCommunicationError(
                f"Request timeout after {self.config.timeout} seconds", "TIMEOUT"
            ) from e
        except connection_errors as e:
            raise ServerCommunicationError(f"Connection error: {e}", "CONNECTION_ERROR") from e
        except request_errors as e:
            raise ServerCommunicationError(f"Request failed: {e}") from e

        return self._handle_response(call, response.status_code, response.text)

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        sign: bool = False
    ) -> Any:
        """Prepare and send a request synchronously"""
        return self.send(self.prepare(method, path, body=body, headers=headers, sign=sign))

    async def send_async(self, call: PreparedCall, client: Optional[Any] = None) -> Any:
        """
        Send a prepared request with httpx.

        Args:
            call: Prepared request
            client: Optional httpx.AsyncClient to reuse (left open)

        Raises:
            ApiError: On non-2xx responses
            ServerCommunicationError: On network errors
        """
        if client is None and not HTTPX_AVAILABLE:
            raise ServerCommunicationError(
                "Async requests require 'httpx' package. Install with: pip install httpx"
            )

        logger.debug(f"Making async {call.method} request to {call.url}")
        timeout_errors, http_errors = _httpx_errors()

        try:
            if client is not None:
                response = await client.request(
                    call.method, call.url, headers=call.headers, content=call.content
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self.config.timeout, verify=self.config.verify_ssl
                ) as owned_client:
                    response = await owned_client.request(
                        call.method, call.url, headers=call.headers, content=call.content
                    )
        except timeout_errors as e:
            raise ServerCommunicationError(
                f"Request timeout after {self.config.timeout} seconds", "TIMEOUT"
            ) from e
        except http_errors as e:
            raise ServerCommunicationError(f"Request failed: {e}") from e

        return self._handle_response(call, response.status_code, response.text)

    async def request_async(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        sign: bool = False,
        client: Optional[Any] = None
    ) -> Any:
        """Prepare and send a request with httpx"""
        call = self.prepare(method, path, body=body, headers=headers, sign=sign)
        return await self.send_async(call, client=client)

    def _handle_response(self, call: PreparedCall, status_code: int, text: str) -> Any:
        data = parse_response_body(text)

        if not 200 <= status_code <= 299:
            error = build_api_error(status_code, data)
            logger.debug(f"{call.method} {call.path} failed with status {status_code}")
            raise error

        return data

    # Shortcuts

    def get(self, path: str, **kwargs) -> Any:
        return self.request('GET', path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request('POST', path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request('PUT', path, **kwargs)

    def patch(self, path: str, **kwargs) -> Any:
        return self.request('PATCH', path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request('DELETE', path, **kwargs)

    async def get_async(self, path: str, **kwargs) -> Any:
        return await self.request_async('GET', path, **kwargs)

    async def post_async(self, path: str, **kwargs) -> Any:
        return await self.request_async('POST', path, **kwargs)

    async def put_async(self, path: str, **kwargs) -> Any:
        return await self.request_async('PUT', path, **kwargs)

    async def patch_async(self, path: str, **kwargs) -> Any:
        return await self.request_async('PATCH', path, **kwargs)

    async def delete_async(self, path: str, **kwargs) -> Any:
        return await self.request_async('DELETE', path, **kwargs)

    def close(self):
        """Close the HTTP session."""
        if self.session is not None:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
