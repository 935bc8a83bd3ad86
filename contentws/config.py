# Configuration settings should be set in app.config
# The WebService class attributes hold the defaults, get_config looks them up
# in the order: flask app config -> WebService class -> environment
import os
import logging
from flask import current_app
import contentws
from typing import Any, Optional


def get_config(option: str) -> Optional[Any]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # no app context or option not set in the app config
        result = getattr(contentws.WebService, option, os.environ.get(option, None))
    return result


def get_int_config(option: str) -> int:
    """
    :param option: configuration parameter holding a number, eg. MAX_RESULTS
    :return: the configuration value as an int
    """
    return int(get_config(option))


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return contentws.log.getEffectiveLevel() < logging.INFO
