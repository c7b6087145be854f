"""
Consumers resource
"""

from typing import Any, Dict, Mapping, Optional

from .base import Resource


class Consumers(Resource):

    api_path = '/g_business/v1/consumers'

    def get(self, phone_number: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Look up a consumer by phone number (e.g. '+393331234567')"""
        return self._request('GET', self._path(phone_number), headers=headers)
