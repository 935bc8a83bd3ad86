import datetime

import pytest

from contentws.errors import INVALID_PARAMETER
from contentws.list_query import ALL_ITEMS, MAX_INTEGER, ListQueryParser, parse_date, split_list

NOW = datetime.datetime(2013, 5, 17, 10, 30, 15)


@pytest.fixture
def parser() -> ListQueryParser:
    return ListQueryParser(default_limit=20, max_results=100, default_offset=0)


def _invalid(errors):
    return [error.args[0] for error in errors]


def test_defaults(parser: ListQueryParser) -> None:
    query, errors = parser.parse({}, "", now=NOW)
    assert errors == []
    assert query.id == ALL_ITEMS
    assert query.is_collection
    assert query.offset == 0
    assert query.limit == 20
    assert query.fields is None
    assert query.order is None
    assert query.since == "1970-01-01 00:00:00"
    assert query.before == "2013-05-17 10:30:15"


@pytest.mark.parametrize(
    "route, expected",
    [("", ALL_ITEMS), ("/", ALL_ITEMS), ("12", "12"), ("12.json", "12"), ("12/", "12"), ("12/extra", "12"), (".json", ALL_ITEMS)],
)
def test_id_from_route(parser: ListQueryParser, route: str, expected: str) -> None:
    query, errors = parser.parse({}, route, now=NOW)
    assert errors == []
    assert query.id == expected


@pytest.mark.parametrize("route", ["abc", "-1", "1.5", "abc.json", "12\n", "9223372036854775808", "9" * 30, "9" * 5000])
def test_invalid_route(parser: ListQueryParser, route: str) -> None:
    _, errors = parser.parse({}, route, now=NOW)
    assert _invalid(errors) == ["id"]


@pytest.mark.parametrize("limit, expected", [("9999", 100), ("100", 100), ("5", 5), ("1", 1), ("10.0", 10)])
def test_limit_is_clamped(parser: ListQueryParser, limit: str, expected: int) -> None:
    query, errors = parser.parse({"limit": limit}, now=NOW)
    assert errors == []
    assert query.limit == expected


@pytest.mark.parametrize("limit", ["0", "-5", "abc", "", "2.5"])
def test_invalid_limit(parser: ListQueryParser, limit: str) -> None:
    query, errors = parser.parse({"limit": limit}, now=NOW)
    assert _invalid(errors) == ["limit"]
    assert errors[0].code == INVALID_PARAMETER
    assert errors[0].http_status == 400
    assert query.limit == 20


@pytest.mark.parametrize("offset, expected", [("0", 0), ("15", 15)])
def test_offset(parser: ListQueryParser, offset: str, expected: int) -> None:
    query, errors = parser.parse({"offset": offset}, now=NOW)
    assert errors == []
    assert query.offset == expected


@pytest.mark.parametrize("offset", ["-1", "abc", "", "9223372036854775808", "9" * 30])
def test_invalid_offset(parser: ListQueryParser, offset: str) -> None:
    _, errors = parser.parse({"offset": offset}, now=NOW)
    assert _invalid(errors) == ["offset"]


def test_all_invalid_parameters_are_reported(parser: ListQueryParser) -> None:
    params = {"offset": "-1", "limit": "0", "since": "2013-02-30", "before": "never"}
    _, errors = parser.parse(params, "abc", now=NOW)
    assert _invalid(errors) == ["id", "offset", "limit", "since", "before"]


def test_fields_and_order(parser: ListQueryParser) -> None:
    query, _ = parser.parse({"fields": "title, id  body", "order": ",-created_date,,title,"}, now=NOW)
    assert query.fields == ["title", "id", "body"]
    assert query.order == ["-created_date", "title"]


def test_separators_only(parser: ListQueryParser) -> None:
    query, _ = parser.parse({"fields": " , ", "order": ""}, now=NOW)
    assert query.fields is None
    assert query.order is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2013-05-01", "2013-05-01 00:00:00"),
        ("2013-05-01 12:01:02", "2013-05-01 12:01:02"),
        ("2013-05-01T12:01:02", "2013-05-01 12:01:02"),
        ("01-05-2013", "2013-05-01 00:00:00"),
        ("now", "2013-05-17 10:30:15"),
    ],
)
def test_dates(parser: ListQueryParser, value: str, expected: str) -> None:
    query, errors = parser.parse({"since": value, "before": value}, now=NOW)
    assert errors == []
    assert query.since == expected
    assert query.before == expected


@pytest.mark.parametrize("value", ["2013-02-30", "yesterday", "", "2013-13-01"])
def test_invalid_dates(value: str) -> None:
    assert parse_date(value, NOW) is None


def test_split_list() -> None:
    assert split_list(None) is None
    assert split_list("a b\tc,d") == ["a", "b", "c", "d"]


def test_biggest_id_and_offset(parser: ListQueryParser) -> None:
    query, errors = parser.parse({"offset": str(MAX_INTEGER)}, str(MAX_INTEGER), now=NOW)
    assert errors == []
    assert query.id == str(MAX_INTEGER)
    assert query.offset == MAX_INTEGER


def test_configured_max_offset() -> None:
    parser = ListQueryParser(default_limit=20, max_results=100, default_offset=0, max_offset=1000)
    query, errors = parser.parse({"offset": "1000"}, now=NOW)
    assert errors == [] and query.offset == 1000
    _, errors = parser.parse({"offset": "1001"}, now=NOW)
    assert _invalid(errors) == ["offset"]
    assert "1000" in errors[0].args[1]
