"""
Satispay GBusiness API resources
"""

from .base import Resource, build_query_string
from .payment import Payments
from .consumer import Consumers
from .daily_closure import DailyClosures
from .pre_authorized_payment_token import PreAuthorizedPaymentTokens
from .report import Reports
from .session import Sessions

__all__ = [
    'Resource',
    'build_query_string',
    'Payments',
    'Consumers',
    'DailyClosures',
    'PreAuthorizedPaymentTokens',
    'Reports',
    'Sessions',
]
