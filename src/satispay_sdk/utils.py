"""
Helper utilities for Satispay Python SDK

Amount conversion and formatting, date handling, input validation, external
code generation and payment status helpers.
"""

import json
import re
import secrets
import string
import time
import uuid
from datetime import date, datetime, time as dt_time, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Tuple, Union

from .exceptions import ValidationError

DateLike = Union[date, datetime, str]

EXTERNAL_CODE_MAX_LENGTH = 50
METADATA_MAX_LENGTH = 1000
DEFAULT_LOCALE = 'it-IT'

_EXTERNAL_CODE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
_ITALIAN_PHONE_PATTERN = re.compile(r'^\+39[0-9]{9,10}$')
_PHONE_SEPARATORS = re.compile(r'[\s()-]')
_AMOUNT_NOISE = re.compile(r'[^\d,.-]')


def _parse_iso(value: str) -> datetime:
    # fromisoformat() only learned the 'Z' suffix in 3.11
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}", "INVALID_DATE") from e


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, str):
        return _parse_iso(value)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, dt_time.min)
    raise ValidationError(f"Expected a date, datetime or ISO string, got {type(value).__name__}", "INVALID_DATE")


class Amount:
    """Convert between euros and cents (Satispay amounts are in cents)"""

    @staticmethod
    def to_cents(euros: Union[int, float, str, Decimal]) -> int:
        """
        Convert euros to cents, rounding half up.

        Example:
            Amount.to_cents(10.50) -> 1050
        """
        try:
            value = Decimal(str(euros)) * 100
        except InvalidOperation as e:
            raise ValidationError(f"Invalid amount: {euros}", "INVALID_AMOUNT") from e
        return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    @staticmethod
    def to_euros(cents: int) -> float:
        return cents / 100

    @staticmethod
    def format(cents: int, locale: str = DEFAULT_LOCALE) -> str:
        """
        Format an amount in cents for display.

        Supports 'it-IT' ("1.234,50 €") and 'en-US' ("€1,234.50").
        Other locales use the it-IT layout.
        """
        euros = Decimal(cents) / 100
        sign = '-' if euros < 0 else ''
        grouped = f"{abs(euros):,.2f}"

        if locale == 'en-US':
            return f"{sign}€{grouped}"

        # Swap separators to the Italian convention
        italian = grouped.replace(',', '_').replace('.', ',').replace('_', '.')
        return f"{sign}{italian} €"

    @staticmethod
    def parse(formatted: str) -> int:
        """
        Parse a formatted amount to cents.

        The last ',' or '.' is taken as decimal separator, the other one as
        thousands separator.

        Raises:
            ValidationError: If no number can be read
        """
        cleaned = _AMOUNT_NOISE.sub('', formatted or '')
        decimal_pos = max(cleaned.rfind(','), cleaned.rfind('.'))

        if decimal_pos >= 0:
            integer_part = cleaned[:decimal_pos].replace(',', '').replace('.', '')
            fraction_part = cleaned[decimal_pos + 1:]
            normalized = f"{integer_part}.{fraction_part}"
        else:
            normalized = cleaned

        try:
            return Amount.to_cents(Decimal(normalized))
        except (InvalidOperation, ValidationError) as e:
            raise ValidationError(f"Invalid amount format: {formatted}", "INVALID_AMOUNT") from e

    @staticmethod
    def is_valid(cents: Any) -> bool:
        """Amounts must be positive integers (in cents)"""
        return isinstance(cents, int) and not isinstance(cents, bool) and cents > 0


class DateUtils:
    """Date formatting and manipulation helpers"""

    @staticmethod
    def format_for_api(value: DateLike) -> str:
        """
        Format a date as YYYY-MM-DD.

        Aware datetimes are converted to UTC first.
        """
        dt = _to_datetime(value)
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return dt.strftime('%Y-%m-%d')

    @staticmethod
    def format_to_yyyymmdd(value: DateLike) -> str:
        """Format a date as YYYYMMDD, the daily closure path format"""
        return _to_datetime(value).strftime('%Y%m%d')

    @staticmethod
    def parse_from_api(value: str) -> datetime:
        return _parse_iso(value)

    @staticmethod
    def get_daily_closure_range(value: DateLike) -> Tuple[datetime, datetime]:
        """First and last instant of the day containing value"""
        day = _to_datetime(value)
        start = day.replace(hour=0, minute=0, second=0, microsecond=0)
        end = day.replace(hour=23, minute=59, second=59, microsecond=999000)
        return start, end

    @staticmethod
    def get_today() -> datetime:
        return datetime.combine(date.today(), dt_time.min)

    @staticmethod
    def get_yesterday() -> datetime:
        return DateUtils.get_today() - timedelta(days=1)

    @staticmethod
    def is_today(value: DateLike) -> bool:
        return _to_datetime(value).date() == date.today()


class Validation:
    """
    Input validation helpers.

    Validators for free-form input raise ValidationError with a readable
    message and return True otherwise.
    """

    VALID_FLOWS = ('MATCH_CODE', 'MATCH_USER', 'REFUND')
    VALID_CURRENCIES = ('EUR',)

    @staticmethod
    def validate_external_code(code: str) -> bool:
        if not code or not code.strip():
            raise ValidationError("External code cannot be empty", "INVALID_EXTERNAL_CODE")
        if len(code) > EXTERNAL_CODE_MAX_LENGTH:
            raise ValidationError(
                f"External code must be {EXTERNAL_CODE_MAX_LENGTH} characters or less",
                "INVALID_EXTERNAL_CODE"
            )
        if not _EXTERNAL_CODE_PATTERN.match(code):
            raise ValidationError(
                "External code can only contain letters, numbers, hyphens, and underscores",
                "INVALID_EXTERNAL_CODE"
            )
        return True

    @staticmethod
    def validate_flow(flow: str) -> bool:
        return flow in Validation.VALID_FLOWS

    @staticmethod
    def validate_currency(currency: str) -> bool:
        return currency in Validation.VALID_CURRENCIES

    @staticmethod
    def validate_phone(phone: str) -> bool:
        """Italian numbers: +39 followed by 9 or 10 digits, separators ignored"""
        cleaned = _PHONE_SEPARATORS.sub('', phone or '')
        if not _ITALIAN_PHONE_PATTERN.match(cleaned):
            raise ValidationError(
                "Invalid Italian phone number format. Use +39 followed by 9-10 digits",
                "INVALID_PHONE"
            )
        return True

    @staticmethod
    def validate_metadata(metadata: Mapping[str, Any]) -> bool:
        if not isinstance(metadata, Mapping):
            raise ValidationError("Metadata must be an object", "INVALID_METADATA")

        try:
            serialized = json.dumps(metadata, separators=(',', ':'), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Metadata is not JSON serializable: {e}", "INVALID_METADATA") from e

        if len(serialized) > METADATA_MAX_LENGTH:
            raise ValidationError(
                f"Metadata must be {METADATA_MAX_LENGTH} characters or less when stringified",
                "INVALID_METADATA"
            )
        return True


class CodeGenerator:
    """External code generators"""

    @staticmethod
    def generate_external_code(prefix: str = 'ORDER') -> str:
        """e.g. 'ORDER-1704123456789'"""
        return f"{prefix}-{int(time.time() * 1000)}"

    @staticmethod
    def generate_random_external_code(prefix: str = 'ORDER') -> str:
        """e.g. 'ORDER-a1b2c3d4'"""
        alphabet = string.ascii_lowercase + string.digits
        suffix = ''.join(secrets.choice(alphabet) for _ in range(8))
        return f"{prefix}-{suffix}"

    @staticmethod
    def generate_uuid_external_code(prefix: str = 'ORDER') -> str:
        return f"{prefix}-{uuid.uuid4()}"


STATUS_LABELS: Dict[str, Dict[str, str]] = {
    'it-IT': {
        'PENDING': 'In attesa',
        'ACCEPTED': 'Accettato',
        'CANCELED': 'Annullato',
        'EXPIRED': 'Scaduto',
    },
    'en-US': {
        'PENDING': 'Pending',
        'ACCEPTED': 'Accepted',
        'CANCELED': 'Canceled',
        'EXPIRED': 'Expired',
    },
}


class PaymentStatusUtils:
    """Payment status helpers"""

    FINAL_STATUSES = ('ACCEPTED', 'CANCELED', 'EXPIRED')

    @staticmethod
    def is_pending(status: str) -> bool:
        return status == 'PENDING'

    @staticmethod
    def is_accepted(status: str) -> bool:
        return status == 'ACCEPTED'

    @staticmethod
    def is_canceled(status: str) -> bool:
        return status == 'CANCELED'

    @staticmethod
    def is_expired(status: str) -> bool:
        return status == 'EXPIRED'

    @staticmethod
    def is_final(status: str) -> bool:
        return status in PaymentStatusUtils.FINAL_STATUSES

    @staticmethod
    def get_label(status: str, locale: str = DEFAULT_LOCALE) -> str:
        """Human readable status, the raw status when unknown"""
        return STATUS_LABELS.get(locale, {}).get(status, status)
