"""
Payments resource
"""

from typing import Any, Dict, Mapping, Optional

from .base import Resource


class Payments(Resource):
    """Create, retrieve, list and update payments"""

    api_path = '/g_business/v1/payments'

    def create(self, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Create a payment.

        Args:
            body: Payment creation body (flow, amount_unit, currency, ...)
            headers: Extra headers, e.g. Idempotency-Key

        Returns:
            dict: Created payment
        """
        return self._request('POST', self._path(), body=body, headers=headers)

    def get(self, payment_id: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('GET', self._path(payment_id), headers=headers)

    def all(self, query: Optional[Mapping[str, Any]] = None,
            headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        List payments.

        Args:
            query: Filters (limit, starting_after, status, from_date, ...)

        Returns:
            dict: {'list': [...], 'has_more': bool}
        """
        return self._request('GET', self._path(query=query), headers=headers)

    def update(self, payment_id: str, body: Mapping[str, Any],
               headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Update a payment (ACCEPT, CANCEL or CANCEL_OR_REFUND)"""
        return self._request('PUT', self._path(payment_id), body=body, headers=headers)
