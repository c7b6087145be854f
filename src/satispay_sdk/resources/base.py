"""
Base class for Satispay GBusiness API resources
"""

from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

from ..http_client import SatispayHttpClient


def build_query_string(query: Optional[Mapping[str, Any]]) -> str:
    """
    Encode query parameters, dropping None values.

    Returns:
        str: '?a=1&b=2', or '' when nothing is left
    """
    if not query:
        return ''

    params = [(key, _query_value(value)) for key, value in query.items() if value is not None]
    if not params:
        return ''
    return '?' + urlencode(params)


def _query_value(value: Any) -> str:
    # Sequences become one comma separated value
    if isinstance(value, (list, tuple)):
        return ','.join(_query_value(item) for item in value)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if hasattr(value, 'value'):
        return str(value.value)
    return str(value)


def path_segment(value: str) -> str:
    """Quote a value used as a single path segment ('+' is kept as is)"""
    return quote(str(value), safe='+')


class Resource:
    """
    Signed access to one API collection.

    Every call is signed; the query string is part of the signed path.
    """

    api_path = ''

    def __init__(self, http: SatispayHttpClient):
        self.http = http

    def _path(self, *segments: str, query: Optional[Mapping[str, Any]] = None) -> str:
        path = self.api_path
        for segment in segments:
            path += '/' + path_segment(segment)
        return path + build_query_string(query)

    def _request(self, method: str, path: str, body: Any = None,
                 headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.http.request(method, path, body=body, headers=headers, sign=True)
