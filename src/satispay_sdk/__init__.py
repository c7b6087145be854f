"""
Satispay GBusiness Python SDK
Signed access to the Satispay GBusiness API with RSA request signatures
"""

from .version import __version__
from .crypto import (
    RSAService,
    RSAKeyPair,
    CryptographyRSAService,
    RSAServiceFactory,
    get_rsa_service,
    verify_signature,
    check_platform_compatibility,
)
from .exceptions import (
    SatispaySDKError,
    KeyGenerationError,
    SigningError,
    NoBackendAvailableError,
    ValidationError,
    ConfigurationError,
    ServerCommunicationError,
    ApiError,
)
from .config import (
    ApiConfig,
    Credentials,
    Environment,
)
from .signing import (
    RequestSigner,
    SignatureEnvelope,
    HttpMethod,
    build_signed_headers,
    build_signed_headers_sync,
    calculate_digest,
    format_http_date,
)
from .http_client import (
    SatispayHttpClient,
    PreparedCall,
    HEADER_IDEMPOTENCY_KEY,
)
from .client import SatispayClient
from .types import (
    ApiAuthentication,
    PaymentStatus,
    PaymentFlow,
    PaymentAction,
    PaymentType,
    Actor,
    PreAuthorizedTokenStatus,
)
from .utils import (
    Amount,
    DateUtils,
    Validation,
    CodeGenerator,
    PaymentStatusUtils,
)


def initialize_sdk():
    """
    Initialize the Satispay SDK and check platform compatibility.

    Returns:
        dict: Compatibility information with 'compatible' (bool) and 'warnings' (list)
    """
    warnings = []
    compatible = True

    try:
        compat_info = check_platform_compatibility()
        if not compat_info['cryptography_available']:
            warnings.append('Cryptography package not available - key generation and signing will fail')
            compatible = False

        if not compat_info['rsa_supported']:
            warnings.append('RSA not supported by cryptography package - check version')
            compatible = False

    except Exception as e:
        warnings.append(f'Platform compatibility check failed: {e}')
        compatible = False

    return {
        'compatible': compatible,
        'warnings': warnings
    }


def is_compatible():
    """
    Quick synchronous compatibility check.

    Returns:
        bool: True if platform is compatible with basic SDK functionality
    """
    return initialize_sdk()['compatible']


__all__ = [
    '__version__',
    # RSA
    'RSAService',
    'RSAKeyPair',
    'CryptographyRSAService',
    'RSAServiceFactory',
    'get_rsa_service',
    'verify_signature',
    'check_platform_compatibility',
    'initialize_sdk',
    'is_compatible',
    # Exceptions
    'SatispaySDKError',
    'KeyGenerationError',
    'SigningError',
    'NoBackendAvailableError',
    'ValidationError',
    'ConfigurationError',
    'ServerCommunicationError',
    'ApiError',
    # Configuration
    'ApiConfig',
    'Credentials',
    'Environment',
    # Request signing
    'RequestSigner',
    'SignatureEnvelope',
    'HttpMethod',
    'build_signed_headers',
    'build_signed_headers_sync',
    'calculate_digest',
    'format_http_date',
    # HTTP client
    'SatispayHttpClient',
    'PreparedCall',
    'HEADER_IDEMPOTENCY_KEY',
    # Client
    'SatispayClient',
    # Types
    'ApiAuthentication',
    'PaymentStatus',
    'PaymentFlow',
    'PaymentAction',
    'PaymentType',
    'Actor',
    'PreAuthorizedTokenStatus',
    # Utilities
    'Amount',
    'DateUtils',
    'Validation',
    'CodeGenerator',
    'PaymentStatusUtils',
]
