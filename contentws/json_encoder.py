# contentws to json encoding

import datetime
import decimal
import json
from uuid import UUID
import contentws
from .list_query import SQL_DATE_FORMAT


class WebServiceJSONEncoder(json.JSONEncoder):
    """
    JSON encoding of the item values returned by the stores
    """

    # pylint: disable=too-many-return-statements, method-hidden
    def default(self, obj):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, datetime.datetime):
            return obj.strftime(SQL_DATE_FORMAT)
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):  # pragma: no cover
            return str(obj)
        if isinstance(obj, decimal.Decimal):  # pragma: no cover
            return float(obj)
        if isinstance(obj, bytes):  # pragma: no cover
            if obj == b"":
                return ""
            contentws.log.debug("WebServiceJSONEncoder: serializing bytes obj")
            return obj.hex()

        contentws.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        return super().default(obj)
