# Application factory and configuration file loading
#
# The configuration is read from a json file:
#   $WEBSERVICE_CONFIG/config.json, falling back to $WEBSERVICE_CONFIG/config.dist.json
# ./config is used when the WEBSERVICE_CONFIG environment variable isn't set.
#
# Keys are upper-cased into the flask app config, eg.
#   {"max_results": 50, "db_driver": "mysql", "db_host": "localhost", "db_user": "ws", "db_pass": "...", "db_name": "content"}
#
import json
import os
from typing import Optional
from flask import Flask
from sqlalchemy.engine import URL
import contentws
from .content_types import content_resources
from .errors import ConfigurationError
from .ws_api import WebServiceAPI
from .ws_init import DB

CONFIG_ENV = "WEBSERVICE_CONFIG"
CONFIG_FILES = ("config.json", "config.dist.json")
DEFAULT_DATABASE_URI = "sqlite://"
# configuration db drivers -> sqlalchemy dialects
DB_DRIVERS = {"mysqli": "mysql", "pgsql": "postgresql"}


def get_config_path(config_dir: Optional[str] = None) -> str:
    """
    :param config_dir: configuration folder, defaults to $WEBSERVICE_CONFIG or ./config
    :return: path of config.json if it exists, config.dist.json otherwise
    """
    if config_dir is None:
        config_dir = os.environ.get(CONFIG_ENV) or os.path.join(os.getcwd(), "config")
    for filename in CONFIG_FILES:
        path = os.path.join(config_dir, filename)
        if os.path.isfile(path):
            return path
    return os.path.join(config_dir, CONFIG_FILES[-1])


def database_uri(config: dict) -> Optional[str]:
    """
    :param config: upper-cased configuration with DB_DRIVER, DB_HOST, DB_USER, DB_PASS and DB_NAME
    :return: sqlalchemy database uri, None if no DB_DRIVER is configured
    """
    driver = config.get("DB_DRIVER")
    if not driver:
        return None
    url = URL.create(
        DB_DRIVERS.get(driver, driver),
        username=config.get("DB_USER") or None,
        password=config.get("DB_PASS") or None,
        host=config.get("DB_HOST") or None,
        database=config.get("DB_NAME") or None,
    )
    return url.render_as_string(hide_password=False)


def load_config_file(path: Optional[str] = None) -> dict:
    """
    :param path: configuration file, see get_config_path
    :return: flask configuration dict
    :raise ConfigurationError: the file doesn't exist or doesn't contain a json object
    """
    if path is None:
        path = get_config_path()
    try:
        with open(path, "rt") as fp:
            data = json.load(fp)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Configuration file {path} does not exist or is unreadable: {exc}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} should contain a json object")

    config = {key.upper(): value for key, value in data.items()}
    if "SQLALCHEMY_DATABASE_URI" not in config:
        uri = database_uri(config)
        if uri is not None:
            config["SQLALCHEMY_DATABASE_URI"] = uri
    contentws.log.debug(f"Loaded configuration from {path}")
    return config


def create_api(app: Flask, prefix: str = "/v1") -> WebServiceAPI:
    api = WebServiceAPI(app, prefix=prefix)
    api.expose(*content_resources())
    return api


def create_app(config: Optional[dict] = None, prefix: str = "/v1") -> Flask:
    """
    :param config: flask configuration, read with load_config_file when omitted
    :param prefix: url prefix of the api
    :return: flask app serving the content collections
    """
    if config is None:
        config = load_config_file()

    app = Flask("contentws")
    app.config.update(config)
    app.config.setdefault("SQLALCHEMY_DATABASE_URI", DEFAULT_DATABASE_URI)
    DB.init_app(app)

    with app.app_context():
        DB.create_all()
        create_api(app, prefix)

    return app
