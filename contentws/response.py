# Response class
from flask import Response


class WebServiceResponse(Response):
    """
    Response class, all responses are json
    """

    default_mimetype = "application/json"
