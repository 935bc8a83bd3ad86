# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# Two kinds of errors exist:
# - exceptions (this module): raised for malformed parameters (ValidationError)
#   and for faults (GenericError, ConfigurationError). They abort the request and are
#   caught in http_method_decorator and formatted, for example:
#   {
#        "message": "Validation Error: limit should be a positive number",
#        "code": 400,
#        "type": "ValidationError"
#   }
# - accumulated errors (error_collector.py): per-field problems that are collected
#   and returned together, identified by the codes in ERROR_CODES
#
import traceback
from flask import has_request_context, request
from sqlalchemy.exc import DontWrapMixin
from http import HTTPStatus
import contentws
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"

# Accumulated error codes: code -> (log message format, http status hint)
# A hint of None means the collector falls back to its default status (401)
MISSING_FIELD = "308"
UNKNOWN_USER = "201"
MEDIA_SAVE_FAILED = "301"
METHOD_DISABLED = "601"
INVALID_PARAMETER = "400"

ERROR_CODES = {
    MISSING_FIELD: ("Missing mandatory field {}", None),
    UNKNOWN_USER: ("Unknown user id {}", None),
    MEDIA_SAVE_FAILED: ("Failed to save media: {}", None),
    METHOD_DISABLED: ("Method not supported on {}", HTTPStatus.METHOD_NOT_ALLOWED.value),
    INVALID_PARAMETER: ("Invalid parameter {}: {}", HTTPStatus.BAD_REQUEST.value),
}


def error_message(code, args):
    """
    :param code: accumulated error code
    :param args: error arguments
    :return: human readable message (used for logging, the client only receives code and args)
    """
    fmt, _ = ERROR_CODES.get(code, ("Error {}".format(code), None))
    try:
        return fmt.format(*args)
    except IndexError:
        return f"{fmt} {args}"


class WebServiceError(Exception, DontWrapMixin):
    """
    Base class of the exceptions raised by contentws
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""

    def to_dict(self):
        """
        :return: json serializable error body
        """
        return dict(message=self.message, code=self.status_code, type=self.__class__.__name__)


class GenericError(WebServiceError):
    """
    This exception is raised when a fault has been detected (database, storage, ...)
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        Exception.__init__(self)
        self.status_code = status_code
        # subclasses log with their own prefix, eg. "Configuration Error: "
        contentws.log.error("%s%s", self.message, message)
        if is_debug():
            if has_request_context():
                contentws.log.info(f"Error in {request.url}")
            contentws.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class ConfigurationError(GenericError):
    """
    This exception is raised when the configuration can't be read
    """

    message = "Configuration Error: "


class ValidationError(WebServiceError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, errors=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param errors: the individual parameter errors, when more than one parameter was invalid
        """
        Exception.__init__(self)
        self.status_code = status_code
        self.errors = list(errors or [])
        contentws.log.warning("ValidationError: %s", message)
        self.message += message
