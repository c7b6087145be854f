"""
Reports resource
"""

from typing import Any, Dict, Mapping, Optional

from .base import Resource


class Reports(Resource):

    api_path = '/g_business/v1/reports'

    def create(self, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Request generation of a report"""
        return self._request('POST', self._path(), body=body, headers=headers)

    def all(
        self,
        limit: Optional[int] = None,
        starting_after: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> Dict[str, Any]:
        """
        List reports.

        Returns:
            dict: {'list': [...], 'has_more': bool}
        """
        query = {
            'limit': limit or None,
            'starting_after': starting_after or None,
        }
        return self._request('GET', self._path(query=query), headers=headers)

    def get(self, report_id: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self._request('GET', self._path(report_id), headers=headers)
