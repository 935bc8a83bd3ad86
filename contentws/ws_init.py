import logging
import os
import sys
import time
from flask import Flask, g
from flask_sqlalchemy import SQLAlchemy
from .request import WebServiceRequest
from .response import WebServiceResponse
from .json_encoder import WebServiceJSONEncoder
from .config import get_config
import contentws
import flask.app


class WebService:
    """This class configures the Flask application to serve content resources
    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    DEFAULT_LIMIT = 20  # page size when the client doesn't send a limit
    MAX_RESULTS = 100  # requested limits are clamped to this value
    DEFAULT_OFFSET = 0
    MAX_OFFSET = 2**63 - 1  # bigger offsets are rejected, sql drivers can't bind them
    UPLOAD_FOLDER = os.path.join(os.getcwd(), "uploads")  # where uploaded media files are saved
    UPLOAD_URL = "uploads/"  # prefix of the media urls returned to the client
    MEDIA_FIELD = "screenshots"  # name of the multipart field holding uploaded media
    POWERED_BY = "Web Service/1.0"
    CORS_DOMAIN = None  # set to add cors headers to the responses
    LOGLEVEL = logging.WARNING

    def __init__(self, app: flask.app.Flask, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: flask.app.Flask, app_db: SQLAlchemy = None, **kwargs) -> None:
        """
        Application initialization: request/response classes, json encoding and response headers
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app_db is None:
            app_db = app.extensions.get("sqlalchemy", contentws.DB)

        contentws.DB = self.db = app_db

        app.request_class = WebServiceRequest
        app.response_class = WebServiceResponse
        app.url_map.strict_slashes = False
        # flask-restful serializes the resource results with these json.dumps settings
        app.config.setdefault("RESTFUL_JSON", {"cls": WebServiceJSONEncoder})
        # error bodies are {"message", "code", "type"}, without flask-restful suggestions
        app.config.setdefault("ERROR_404_HELP", False)

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(WebService, conf_name, conf_val)

        @app.before_request
        def start_timer():
            g.ws_start_time = time.perf_counter()

        @app.after_request
        def add_headers(response):
            start_time = getattr(g, "ws_start_time", None)
            if start_time is not None:
                response.headers["X-Runtime"] = f"{time.perf_counter() - start_time:.6f}"
            response.headers["X-Powered-By"] = get_config("POWERED_BY")
            response.headers["Server"] = ""
            return response

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we redirect eveything to sys.stderr
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# DB and logging initialization
#
DB = SQLAlchemy()

try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = WebService.init_logging(LOGLEVEL)
