"""
Request parameters

Clients may pass parameters in the query string, in a form body or as members of a
json object body. WebServiceRequest.params merges them into one flat string mapping:
- query string args take precedence over the body
- only scalar json members are used, nested objects and arrays are ignored
"""
from flask import Request
from werkzeug.datastructures import FileStorage
import contentws
from .config import get_config


# pylint: disable=too-many-ancestors
class WebServiceRequest(Request):
    """
    Flask request class with the merged request parameters and the uploaded media
    """

    _params = None

    @staticmethod
    def json_scalar(value):
        """
        :return: the string representation of a json scalar, None for other values
        """
        if value is None or isinstance(value, (dict, list)):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def parse_json_params(self) -> dict:
        payload = self.get_json(silent=True)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            contentws.log.debug(f"Ignoring json payload of type {type(payload).__name__}")
            return {}
        result = {}
        for name, value in payload.items():
            value = self.json_scalar(value)
            if value is not None:
                result[name] = value
        return result

    @property
    def params(self) -> dict:
        """
        :return: merged request parameters, name -> string value
        """
        if self._params is None:
            params = self.parse_json_params()
            params.update(self.form.to_dict())
            params.update(self.args.to_dict())
            self._params = params
        return self._params

    @property
    def attachments(self) -> list:
        """
        :return: the non-empty files uploaded in the media field
        """
        media_field = get_config("MEDIA_FIELD")
        return [upload for upload in self.files.getlist(media_field) if isinstance(upload, FileStorage) and upload.filename]
