"""
Type definitions for Satispay GBusiness API payloads
"""

from dataclasses import dataclass
from enum import Enum

from .config.api_config import Credentials


class PaymentStatus(str, Enum):
    """Payment status"""
    PENDING = "PENDING"
    AUTHORIZED = "AUTHORIZED"
    ACCEPTED = "ACCEPTED"
    CANCELED = "CANCELED"


class PaymentFlow(str, Enum):
    """Payment flow"""
    MATCH_CODE = "MATCH_CODE"
    MATCH_USER = "MATCH_USER"
    REFUND = "REFUND"
    PRE_AUTHORIZED = "PRE_AUTHORIZED"
    FUND_LOCK = "FUND_LOCK"
    PRE_AUTHORIZED_FUND_LOCK = "PRE_AUTHORIZED_FUND_LOCK"
    HOTP_AUTH = "HOTP_AUTH"


class PaymentAction(str, Enum):
    """Action used when updating a payment"""
    ACCEPT = "ACCEPT"
    CANCEL = "CANCEL"
    CANCEL_OR_REFUND = "CANCEL_OR_REFUND"


class PaymentType(str, Enum):
    TO_BUSINESS = "TO_BUSINESS"
    REFUND_TO_BUSINESS = "REFUND_TO_BUSINESS"


class Actor(str, Enum):
    CONSUMER = "CONSUMER"
    SHOP = "SHOP"


class PreAuthorizedTokenStatus(str, Enum):
    """Pre-authorized payment token status"""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    CANCELED = "CANCELED"


@dataclass(frozen=True)
class ApiAuthentication:
    """
    Result of an activation token exchange

    Attributes:
        private_key: Generated PKCS8 PEM private key
        public_key: Generated SPKI PEM public key, registered with Satispay
        key_id: Key identifier returned by Satispay
    """
    private_key: str
    public_key: str
    key_id: str

    def to_credentials(self) -> Credentials:
        """Credentials ready to sign requests"""
        return Credentials(
            private_key=self.private_key,
            public_key=self.public_key,
            key_id=self.key_id,
        )

    def __repr__(self) -> str:
        return f"ApiAuthentication(key_id={self.key_id!r})"
