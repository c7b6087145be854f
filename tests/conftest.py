"""
Shared fixtures for the Satispay SDK test suite
"""

import pytest

from satispay_sdk.config import Credentials
from satispay_sdk.crypto import CryptographyRSAService, RSAKeyPair, RSAService


class StaticRSAService(RSAService):
    """RSA service returning canned values, for transport level tests"""

    name = "static"

    def __init__(self, key_pair=None, signature=b"static-signature"):
        self.key_pair = key_pair
        self.signature = signature
        self.signed_messages = []

    def is_available(self):
        return True

    def generate_key_pair(self):
        return self.key_pair

    def sign(self, private_key, message):
        self.signed_messages.append(message)
        return self.signature


@pytest.fixture(scope="session")
def rsa_key_pair() -> RSAKeyPair:
    """One real 2048-bit key pair shared by the whole run"""
    return CryptographyRSAService().generate_key_pair()


@pytest.fixture
def credentials(rsa_key_pair) -> Credentials:
    return Credentials(
        private_key=rsa_key_pair.private_key,
        public_key=rsa_key_pair.public_key,
        key_id="abc123",
    )


@pytest.fixture
def static_rsa_service(rsa_key_pair) -> StaticRSAService:
    return StaticRSAService(key_pair=rsa_key_pair)
