"""
POS sessions resource
"""

from typing import Any, Dict, Mapping, Optional

from .base import Resource


class Sessions(Resource):
    """Open, read and update POS sessions and post session events"""

    api_path = '/g_business/v1/sessions'

    def open(self, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('POST', self._path(), body=body, headers=headers)

    def get(self, session_id: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('GET', self._path(session_id), headers=headers)

    def update(self, session_id: str, body: Mapping[str, Any],
               headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('PATCH', self._path(session_id), body=body, headers=headers)

    def create_event(self, session_id: str, body: Mapping[str, Any],
                     headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Add an event (e.g. an item) to an open session"""
        return self._request('POST', self._path(session_id, 'events'), body=body, headers=headers)
