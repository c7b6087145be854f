"""
Pre-authorized payment tokens resource
"""

from typing import Any, Dict, Mapping, Optional

from .base import Resource


class PreAuthorizedPaymentTokens(Resource):
    """Create, retrieve and update pre-authorized payment tokens"""

    api_path = '/g_business/v1/pre_authorized_payment_tokens'

    def create(self, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('POST', self._path(), body=body, headers=headers)

    def get(self, token_id: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('GET', self._path(token_id), headers=headers)

    def update(self, token_id: str, body: Mapping[str, Any],
               headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('PUT', self._path(token_id), body=body, headers=headers)
