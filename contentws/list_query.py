"""
Collection query parameters

GET requests may contain following query args:
- offset : number of items to skip (>= 0)
- limit : number of items to return, clamped to the configured maximum
- fields : csv (or whitespace separated) list of fields to return
- order : csv (or whitespace separated) list of fields to order by, "-" prefix for descending order
- since / before : created date range

The item id is taken from the route remainder, eg. /v1/content/12.json => "12",
/v1/content => "*" (the whole collection).

All invalid parameters are reported, not only the first one.
"""
import datetime
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from .error_collector import Error
from .errors import ERROR_CODES, INVALID_PARAMETER

ALL_ITEMS = "*"
FORMAT_SUFFIX = ".json"
SQL_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_SINCE = "1970-01-01 00:00:00"
DEFAULT_BEFORE = "now"
# date representations accepted for since/before
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%d-%m-%Y",
)
LIST_SEPARATORS = re.compile(r"[\s,]+")
ITEM_ID = re.compile(r"\d+", re.ASCII)
# largest value of a signed 64-bit sql integer, bigger ids and offsets can't be queried
MAX_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class ListQuery:
    """
    Parsed collection query
    """

    id: str = ALL_ITEMS
    offset: int = 0
    limit: int = 20
    fields: Optional[list] = None
    order: Optional[list] = None
    since: str = DEFAULT_SINCE
    before: Optional[str] = None

    @property
    def is_collection(self) -> bool:
        return self.id == ALL_ITEMS


def split_list(value: Optional[str]) -> Optional[list]:
    """
    :param value: "title, id body"
    :return: ["title", "id", "body"], or None if the value is missing or only contains separators
    """
    if value is None:
        return None
    result = [token for token in LIST_SEPARATORS.split(value) if token]
    return result or None


def parse_number(value: str) -> Optional[int]:
    """
    :param value: numeric string, eg. "10", "10.0"
    :return: the integer value, None if the value isn't an integral number
    """
    value = str(value).strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def parse_date(value: str, now: Optional[datetime.datetime] = None) -> Optional[str]:
    """
    :param value: date string in one of the DATE_FORMATS or "now"
    :param now: the current time, used for "now"
    :return: date in SQL_DATE_FORMAT, None if the value isn't a valid calendar date
    """
    value = str(value).strip()
    if not value:
        return None
    if value.lower() == "now":
        now = now or datetime.datetime.now()
        return now.strftime(SQL_DATE_FORMAT)

    for date_format in DATE_FORMATS:
        try:
            # strptime rejects days that don't exist in the gregorian calendar (eg. 2013-02-30)
            date = datetime.datetime.strptime(value, date_format)
        except ValueError:
            continue
        return date.strftime(SQL_DATE_FORMAT)
    return None


class ListQueryParser:
    """
    Parse the collection query args

    :param default_limit: limit used when the client doesn't specify one
    :param max_results: maximum limit
    :param default_offset: offset used when the client doesn't specify one
    :param max_offset: biggest accepted offset
    """

    def __init__(self, default_limit: int = 20, max_results: int = 100, default_offset: int = 0, max_offset: int = MAX_INTEGER) -> None:
        self.default_limit = min(int(default_limit), int(max_results))
        self.max_results = int(max_results)
        self.default_offset = int(default_offset)
        self.max_offset = min(int(max_offset), MAX_INTEGER)

    def parse(
        self, params: Mapping[str, str], route_remainder: str = "", now: Optional[datetime.datetime] = None
    ) -> Tuple[ListQuery, list]:
        """
        :param params: request parameters
        :param route_remainder: the part of the url path following the resource url
        :param now: current time, defaults to datetime.now()
        :return: the parsed ListQuery and a list of errors, one for each invalid parameter
        """
        errors = []
        now = now or datetime.datetime.now()

        def invalid(param, message):
            errors.append(Error(code=INVALID_PARAMETER, args=(param, message), http_status=ERROR_CODES[INVALID_PARAMETER][1]))

        item_id = self.get_id(route_remainder)
        if item_id is None:
            invalid("id", "Unknown content path.")
            item_id = ALL_ITEMS

        offset = self.get_offset(params)
        if offset is None:
            invalid(
                "offset",
                f"Offset should be a positive number up to {self.max_offset}. By default the offset is set to {self.default_offset}",
            )
            offset = self.default_offset

        limit = self.get_limit(params)
        if limit is None:
            invalid("limit", f"Limit should be a positive number. By default the limit is set to {self.default_limit}")
            limit = self.default_limit

        since = self.get_date(params, "since", DEFAULT_SINCE, now)
        if since is None:
            invalid("since", "Since should be a valid date. By default all the results are returned.")
            since = parse_date(DEFAULT_SINCE)

        before = self.get_date(params, "before", DEFAULT_BEFORE, now)
        if before is None:
            invalid("before", "Before should be a valid date. By default all the results until the current date are returned.")
            before = parse_date(DEFAULT_BEFORE, now)

        query = ListQuery(
            id=item_id,
            offset=offset,
            limit=limit,
            fields=split_list(params.get("fields")),
            order=split_list(params.get("order")),
            since=since,
            before=before,
        )
        return query, errors

    @staticmethod
    def get_id(route_remainder: Optional[str]) -> Optional[str]:
        """
        :param route_remainder: eg. "12.json", "12/" or ""
        :return: the item id, ALL_ITEMS for an empty route, None for an invalid route
        """
        route = (route_remainder or "").strip("/")
        if route.endswith(FORMAT_SUFFIX):
            route = route[: -len(FORMAT_SUFFIX)]
        segment = route.split("/")[0]
        if not segment:
            return ALL_ITEMS
        if not ITEM_ID.fullmatch(segment) or len(segment) > len(str(MAX_INTEGER)) or int(segment) > MAX_INTEGER:
            return None
        return segment

    def get_offset(self, params: Mapping[str, str]) -> Optional[int]:
        value = params.get("offset")
        if value is None:
            return self.default_offset
        offset = parse_number(value)
        if offset is None or not 0 <= offset <= self.max_offset:
            return None
        return offset

    def get_limit(self, params: Mapping[str, str]) -> Optional[int]:
        value = params.get("limit")
        if value is None:
            return self.default_limit
        limit = parse_number(value)
        if limit is None:
            return None
        # clamp before validating: a too big limit degrades to the maximum
        limit = min(self.max_results, limit)
        if limit <= 0:
            return None
        return limit

    @staticmethod
    def get_date(params: Mapping[str, str], name: str, default: str, now: datetime.datetime) -> Optional[str]:
        value = params.get(name)
        if value is None:
            return parse_date(default, now)
        return parse_date(value, now)
