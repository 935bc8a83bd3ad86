# flask_restful API subclass
from http import HTTPStatus
import werkzeug
from flask import current_app
from flask_restful import Api, abort
from flask_restful.utils import cors
from functools import wraps
from flask.app import Flask
from typing import Callable
import contentws
from .config import get_config, is_debug
from .descriptor import ResourceDescriptor
from .errors import HIDDEN_LOG, WebServiceError
from .rest import ContentRestAPI
from .ws_init import WebService

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH"]


class WebServiceAPI(Api):
    """
    Subclass of the flask_restful API class where we add the expose_resource method
    this method creates the API endpoints for a ResourceDescriptor
    """

    def __init__(self, app: Flask, prefix: str = "/v1", app_db=None, **kwargs) -> None:
        """
        :param app: flask app
        :param prefix: url prefix of all exposed collections
        :param app_db: flask_sqlalchemy SQLAlchemy instance, contentws.DB by default
        :param kwargs: configuration settings, see WebService
        """
        self.ws = WebService(app, app_db=app_db, **kwargs)
        super().__init__(app, prefix=prefix)

    def expose_resource(self, descriptor: ResourceDescriptor, url_prefix: str = "", **properties) -> type:
        """This method creates the API url endpoints for a ResourceDescriptor
        :param descriptor: the resource we would like to expose
        :param url_prefix: url prefix, appended to the api prefix
        :param properties: additional flask-restful properties
        :return: the generated Resource class

        creates a class of the form

        @api_decorator
        class articles_API(ContentRestAPI):
            descriptor = descriptor
            methods = descriptor.http_methods

        and adds it as an api resource to /articles and /articles/<path:route>
        """
        if not current_app:  # pragma: no cover
            contentws.log.error("Working outside of app context!")

        properties["descriptor"] = descriptor
        # werkzeug answers 405 for the methods that are not listed here
        properties["methods"] = set(descriptor.http_methods)

        api_class_name = f"{descriptor.name}_API"  # name for dynamically generated classes
        api_class = api_decorator(type(api_class_name, (ContentRestAPI,), properties))

        url = f"{url_prefix}/{descriptor.name}"
        endpoint = f"{url_prefix}api.{descriptor.name}"
        contentws.log.info(f"Exposing {descriptor.name} on {self.prefix}{url}, endpoint: {endpoint}, methods: {descriptor.http_methods}")
        self.add_resource(api_class, url, f"{url}/<path:route>", endpoint=endpoint)
        return api_class

    def expose(self, *descriptors: ResourceDescriptor, url_prefix: str = "", **properties) -> None:
        """
        Expose multiple resources at once
        """
        for descriptor in descriptors:
            self.expose_resource(descriptor, url_prefix, **dict(properties))


def api_decorator(cls: type) -> type:
    """Decorator for the API views:
        - add cors
        - add generic exception handling

    :param cls: The class that will be decorated (a ContentRestAPI subclass)
    :return: decorated class
    """
    cors_domain = get_config("CORS_DOMAIN")
    for method_name in [m.lower() for m in HTTP_METHODS]:
        method = getattr(cls, method_name, None)
        if not method:  # pragma: no cover
            continue

        decorated_method = method
        # Add cors
        if cors_domain is not None:
            decorated_method = cors.crossdomain(origin=cors_domain)(decorated_method)
        # Add exception handling
        decorated_method = http_method_decorator(decorated_method)
        setattr(cls, method_name, decorated_method)

    return cls


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the HTTP methods (get, post, put, patch)
    - commit the database
    - convert all exceptions to a JSON serializable {"message", "code", "type"} body

    This method will be called for all requests
    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args, **kwargs):
        """Wrap the method and perform error handling
        :param *args:
        :param **kwargs:
        :return: result of the wrapped method
        """
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
        try:
            result = fun(*args, **kwargs)
            contentws.DB.session.commit()
            return result

        except WebServiceError as exc:
            # contentws exceptions log themselves and hide their details when not debugging
            status_code = exc.status_code
            error = exc.to_dict()

        except werkzeug.exceptions.HTTPException as exc:
            status_code = exc.code
            contentws.log.error(exc.description)
            error = dict(message=exc.description, code=status_code, type=exc.__class__.__name__)

        except Exception as exc:
            contentws.log.exception(exc)
            message = str(exc) if is_debug() else HIDDEN_LOG
            error = dict(message=message, code=status_code, type="GenericError")

        contentws.DB.session.rollback()
        abort(status_code, **error)

    return method_wrapper
