"""
Cryptographic operations for Satispay Python SDK
"""

from .rsa_service import (
    RSAService,
    RSAKeyPair,
    RSA_KEY_SIZE,
    RSA_PUBLIC_EXPONENT,
)

from .rsa_cryptography import (
    CryptographyRSAService,
    verify_signature,
    check_platform_compatibility,
)

from .factory import (
    RSAServiceFactory,
    select_backend,
    get_rsa_service,
)

__all__ = [
    # RSA service contract
    'RSAService',
    'RSAKeyPair',
    'RSA_KEY_SIZE',
    'RSA_PUBLIC_EXPONENT',

    # cryptography backend
    'CryptographyRSAService',
    'verify_signature',
    'check_platform_compatibility',

    # Backend selection
    'RSAServiceFactory',
    'select_backend',
    'get_rsa_service',
]
