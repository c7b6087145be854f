"""
High-level client for the Satispay GBusiness API

This module ties configuration, transport and resources together and
implements the activation token exchange that registers a fresh RSA key
pair with Satispay.
"""

import logging
from typing import Any, Optional

from .config.api_config import ApiConfig
from .crypto.rsa_service import RSAService
from .exceptions import ServerCommunicationError, ValidationError
from .http_client import SatispayHttpClient
from .resources import (
    Payments,
    Consumers,
    DailyClosures,
    PreAuthorizedPaymentTokens,
    Reports,
    Sessions,
)
from .types import ApiAuthentication

logger = logging.getLogger(__name__)

AUTHENTICATION_KEYS_PATH = '/g_business/v1/authentication_keys'


def _redact_token(token: str) -> str:
    return f"{token[:4]}..." if len(token) > 4 else "***"


class SatispayClient:
    """
    Client for the Satispay GBusiness API.

    Resources are available as attributes:

        client = SatispayClient(ApiConfig.from_env())
        payment = client.payments.create({...})
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        rsa_service: Optional[RSAService] = None,
        session: Optional[Any] = None
    ):
        """
        Initialize Satispay client.

        Args:
            config: API configuration (production without credentials if None)
            rsa_service: Optional RSA backend override
            session: Optional requests.Session for the sync transport
        """
        self.http = SatispayHttpClient(config or ApiConfig(), rsa_service=rsa_service, session=session)

        self.payments = Payments(self.http)
        self.consumers = Consumers(self.http)
        self.daily_closures = DailyClosures(self.http)
        self.pre_authorized_payment_tokens = PreAuthorizedPaymentTokens(self.http)
        self.reports = Reports(self.http)
        self.sessions = Sessions(self.http)

    @property
    def config(self) -> ApiConfig:
        return self.http.config

    @config.setter
    def config(self, value: ApiConfig) -> None:
        self.http.config = value

    @property
    def rsa_service(self) -> RSAService:
        return self.http.signer.rsa_service

    def authenticate_with_token(self, token: str) -> ApiAuthentication:
        """
        Generate a key pair and register its public key with an activation token.

        The exchange itself is sent unsigned. On success the client switches
        to the new credentials.

        Args:
            token: Activation token from the Satispay Business dashboard

        Returns:
            ApiAuthentication: Generated keys and the assigned key id

        Raises:
            ValidationError: If token is empty
            KeyGenerationError: If the key pair cannot be generated
            ApiError: If Satispay rejects the token
        """
        key_pair, body = self._prepare_authentication(token)
        response = self.http.request('POST', AUTHENTICATION_KEYS_PATH, body=body, sign=False)
        return self._complete_authentication(key_pair, response)

    async def authenticate_with_token_async(self, token: str, client: Optional[Any] = None) -> ApiAuthentication:
        """
        Async variant of authenticate_with_token, sent over httpx.

        Args:
            token: Activation token
            client: Optional httpx.AsyncClient to reuse
        """
        key_pair, body = self._prepare_authentication(token)
        response = await self.http.request_async(
            'POST', AUTHENTICATION_KEYS_PATH, body=body, sign=False, client=client
        )
        return self._complete_authentication(key_pair, response)

    def _prepare_authentication(self, token: str):
        if not token or not isinstance(token, str) or not token.strip():
            raise ValidationError("Activation token cannot be empty", "INVALID_TOKEN")

        logger.info(f"Authenticating with activation token {_redact_token(token)} on {self.config.environment.value}")

        key_pair = self.rsa_service.generate_key_pair()
        body = {
            'public_key': key_pair.public_key,
            'token': token,
        }
        return key_pair, body

    def _complete_authentication(self, key_pair, response: Any) -> ApiAuthentication:
        key_id = response.get('key_id') if isinstance(response, dict) else None
        if not key_id:
            raise ServerCommunicationError(
                "Authentication response did not contain a key id",
                "INVALID_RESPONSE",
                details={'response': response}
            )

        authentication = ApiAuthentication(
            private_key=key_pair.private_key,
            public_key=key_pair.public_key,
            key_id=key_id,
        )
        self.config = self.config.with_credentials(authentication.to_credentials())

        logger.info(f"Authenticated, key id: {key_id}")
        return authentication

    def close(self):
        """Close HTTP client and clean up resources."""
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
