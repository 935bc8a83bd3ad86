# flake8: noqa: F401
#
# Import order matters: ws_init creates DB and log, the other modules use them
#
from .ws_init import DB, log, WebService
from .errors import ValidationError, GenericError, ConfigurationError, ERROR_CODES
from .error_collector import Error, ErrorCollector, parse_suppress_flag
from .fields import FieldSchema, AlternativeRule, ResolvedFields, resolve_fields
from .list_query import ListQuery, ListQueryParser
from .projection import FieldProjector
from .store import ContentStore, SQLAContentStore
from .descriptor import ResourceDescriptor
from .controller import ResourceController, NO_CONTENT
from .ws_api import WebServiceAPI
from .request import WebServiceRequest
from .app import create_app, load_config_file
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "WebService",
    "WebServiceAPI",
    "create_app",
    "load_config_file",
    # core:
    "FieldSchema",
    "AlternativeRule",
    "ResolvedFields",
    "resolve_fields",
    "ListQuery",
    "ListQueryParser",
    "FieldProjector",
    "Error",
    "ErrorCollector",
    "parse_suppress_flag",
    # resources:
    "ResourceDescriptor",
    "ResourceController",
    "NO_CONTENT",
    "ContentStore",
    "SQLAContentStore",
    # Errors:
    "ERROR_CODES",
    "ValidationError",
    "GenericError",
    "ConfigurationError",
    # request
    "WebServiceRequest",
)
