"""
RSA backend for Satispay Python SDK built on the cryptography package

This module provides the default RSA service: 2048-bit key pair generation
and RSA-SHA256 (PKCS#1 v1.5) signatures, plus a verification helper used to
check that produced signatures are standards conformant.
"""

import sys
import platform
import logging
from typing import Any, Dict, Union

# Import cryptography components
try:
    from cryptography.hazmat.primitives.asymmetric import rsa, padding
    from cryptography.hazmat.primitives import serialization, hashes
    from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
    CRYPTOGRAPHY_AVAILABLE = True
except ImportError:
    CRYPTOGRAPHY_AVAILABLE = False
    rsa = None

from ..exceptions import KeyGenerationError, SigningError, ValidationError
from .rsa_service import RSAService, RSAKeyPair, RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT

logger = logging.getLogger(__name__)


def _to_pem_bytes(key: Union[str, bytes]) -> bytes:
    if isinstance(key, bytes):
        return key
    return key.encode('utf-8')


class CryptographyRSAService(RSAService):
    """
    RSA service implemented via the cryptography package.
    """

    name = "cryptography"

    def is_available(self) -> bool:
        """Check if the cryptography RSA primitives can be used"""
        try:
            return CRYPTOGRAPHY_AVAILABLE and callable(getattr(rsa, 'generate_private_key', None))
        except Exception:
            return False

    def generate_key_pair(self) -> RSAKeyPair:
        """
        Generate a pair of RSA keys.

        Returns:
            RSAKeyPair: PKCS8 private key and SPKI public key as PEM strings

        Raises:
            KeyGenerationError: If key generation fails
        """
        if not CRYPTOGRAPHY_AVAILABLE:
            raise KeyGenerationError(
                "Cryptography package not available - install with: pip install cryptography",
                "CRYPTOGRAPHY_UNAVAILABLE"
            )

        try:
            private_key_obj = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=RSA_KEY_SIZE,
            )

            private_key_pem = private_key_obj.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption()
            ).decode('ascii')

            public_key_pem = private_key_obj.public_key().public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo
            ).decode('ascii')

        except Exception as e:
            raise KeyGenerationError(
                f"Failed to generate RSA keys: {e}",
                "GENERATION_FAILED"
            ) from e

        logger.debug(f"Generated {RSA_KEY_SIZE}-bit RSA key pair")
        return RSAKeyPair(private_key=private_key_pem, public_key=public_key_pem)

    def sign(self, private_key: Union[str, bytes], message: bytes) -> bytes:
        """
        Sign a message with the given private key.

        Args:
            private_key: PKCS8 PEM encoded RSA private key
            message: The exact bytes to sign

        Returns:
            bytes: RSA-SHA256 PKCS#1 v1.5 signature

        Raises:
            SigningError: If the key cannot be used or signing fails
        """
        if not CRYPTOGRAPHY_AVAILABLE:
            raise SigningError(
                "Cryptography package not available for signing",
                "CRYPTOGRAPHY_UNAVAILABLE"
            )

        if not isinstance(message, (bytes, bytearray)):
            raise SigningError(
                f"Message must be bytes, got {type(message).__name__}",
                "INVALID_MESSAGE_TYPE"
            )

        if not private_key or not isinstance(private_key, (str, bytes)):
            raise SigningError("Private key must be a non-empty PEM string", "INVALID_PRIVATE_KEY")

        try:
            private_key_obj = serialization.load_pem_private_key(
                _to_pem_bytes(private_key),
                password=None
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(
                f"Invalid private key: {e}",
                "INVALID_PRIVATE_KEY"
            ) from e

        if not isinstance(private_key_obj, rsa.RSAPrivateKey):
            raise SigningError(
                "Key type mismatch: expected RSA private key",
                "KEY_TYPE_MISMATCH",
                {"key_type": type(private_key_obj).__name__}
            )

        try:
            return private_key_obj.sign(bytes(message), padding.PKCS1v15(), hashes.SHA256())
        except Exception as e:
            raise SigningError(f"Signing failed: {e}", "SIGNING_FAILED") from e


def verify_signature(public_key: Union[str, bytes], message: bytes, signature: bytes) -> bool:
    """
    Verify an RSA-SHA256 PKCS#1 v1.5 signature.

    Args:
        public_key: SPKI PEM encoded RSA public key
        message: Original message bytes
        signature: Raw signature bytes

    Returns:
        bool: True if signature is valid, False otherwise

    Raises:
        ValidationError: If the public key cannot be loaded or is not RSA
    """
    if not CRYPTOGRAPHY_AVAILABLE:
        raise ValidationError(
            "Cryptography package not available for verification",
            "CRYPTOGRAPHY_UNAVAILABLE"
        )

    try:
        public_key_obj = serialization.load_pem_public_key(_to_pem_bytes(public_key))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ValidationError(f"Invalid public key: {e}", "INVALID_PUBLIC_KEY") from e

    if not isinstance(public_key_obj, rsa.RSAPublicKey):
        raise ValidationError("Key type mismatch: expected RSA public key", "KEY_TYPE_MISMATCH")

    try:
        public_key_obj.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        return False


def check_platform_compatibility() -> Dict[str, Any]:
    """
    Check platform compatibility for RSA operations.

    Returns:
        dict: Compatibility information including cryptography availability,
              RSA support and platform details
    """
    compatibility = {
        'cryptography_available': CRYPTOGRAPHY_AVAILABLE,
        'rsa_supported': CryptographyRSAService().is_available(),
        'platform_info': {
            'system': platform.system(),
            'python_version': sys.version,
            'architecture': platform.architecture()[0],
        }
    }

    return compatibility
