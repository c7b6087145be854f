"""
Daily closure resource
"""

from datetime import date as date_type
from typing import Any, Dict, Mapping, Optional, Union

from ..utils import DateUtils
from .base import Resource


class DailyClosures(Resource):

    api_path = '/g_business/v1/daily_closure'

    def get(
        self,
        date: Optional[Union[str, date_type]] = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Retrieve the daily closure of a day.

        Args:
            date: Day as 'YYYYMMDD' or a date (today when omitted)
            query: Optional limit/starting_after, None values are dropped

        Returns:
            dict: Daily closure
        """
        if not date:
            date = date_type.today()
        if not isinstance(date, str):
            date = DateUtils.format_to_yyyymmdd(date)

        return self._request('GET', self._path(date, query=query), headers=headers)
