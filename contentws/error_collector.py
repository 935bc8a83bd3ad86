"""
Accumulated request errors

Validation problems that don't abort the request (missing mandatory fields, an unknown user,
a failed media upload, ...) are added to an ErrorCollector. The controller checks
`errors_exist()` once all input has been processed, so the client receives every problem
in a single response:

    [{"code": "308", "args": ["title"]}, {"code": "201", "args": ["42"]}]

The response status is derived from the collected errors and the `suppress_response_codes`
request flag. An ErrorCollector lives for a single request.
"""
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Iterable, Mapping, Optional
import contentws
from .errors import ERROR_CODES, ValidationError, error_message

SUPPRESS_FLAG = "suppress_response_codes"
# status code used when an error doesn't carry a more specific hint
DEFAULT_ERROR_STATUS = HTTPStatus.UNAUTHORIZED.value


@dataclass(frozen=True)
class Error:
    """
    A single accumulated error, immutable once created
    """

    code: str
    args: tuple = field(default_factory=tuple)
    http_status: Optional[int] = None

    def to_dict(self) -> dict:
        return {"code": self.code, "args": list(self.args)}


def parse_suppress_flag(params: Mapping[str, str]) -> bool:
    """
    Check the input for suppress_response_codes=true in order to suppress the error codes.

    :param params: request parameters
    :return: True if the client asked to always receive HTTP 200
    :raise ValidationError: the flag is neither "true" nor "false"
    """
    value = params.get(SUPPRESS_FLAG)
    if value is None:
        return False

    value = str(value).lower()
    if value == "true":
        return True
    if value == "false":
        return False

    raise ValidationError(f"{SUPPRESS_FLAG} should be set to true or false")


class ErrorCollector:
    """
    Ordered collection of accumulated errors
    """

    def __init__(self, suppress_response_codes: bool = False) -> None:
        self.suppress_response_codes = suppress_response_codes
        self._errors = []

    def add_error(self, code: str, args: Iterable = (), http_status: Optional[int] = None) -> Error:
        """
        :param code: error code, see contentws.errors.ERROR_CODES
        :param args: contextual arguments, eg. the name of the missing field
        :param http_status: status hint, the catalog hint is used when omitted
        :return: the added error
        """
        if isinstance(args, str):
            args = [args]
        args = tuple("" if arg is None else str(arg) for arg in args)
        if http_status is None:
            http_status = ERROR_CODES.get(code, (None, None))[1]

        error = Error(code=code, args=args, http_status=http_status)
        contentws.log.info(error_message(code, args))
        self._errors.append(error)
        return error

    def extend(self, errors: Iterable[Error]) -> None:
        """
        :param errors: errors returned by the field resolver or list query parser
        """
        for error in errors:
            contentws.log.info(error_message(error.code, error.args))
            self._errors.append(error)

    def errors_exist(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> tuple:
        return tuple(self._errors)

    def get_errors(self) -> list:
        """
        :return: json serializable list of {"code": ..., "args": [...]}
        """
        return [error.to_dict() for error in self._errors]

    def get_response_code(self) -> int:
        """
        :return: HTTP status for the error response

        - 200 if the client suppressed the response codes
        - 401 if an error has no status hint
        - the hint of the first error otherwise
        """
        if self.suppress_response_codes:
            return HTTPStatus.OK.value
        if not self._errors or any(error.http_status is None for error in self._errors):
            return DEFAULT_ERROR_STATUS
        return int(self._errors[0].http_status)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self):
        return iter(self._errors)
