"""
Sparse fieldsets: return only the fields requested by the client

    ?fields=id,title => [{"id": 1, "title": "..."}, ...]

Unknown field names are ignored and the fields keep the order of the item.
"""
from typing import Iterable, Mapping, Optional, Union


class FieldProjector:
    """
    :param always: field names included regardless of the requested fields, eg. the item id
    """

    def __init__(self, always: Iterable[str] = ()) -> None:
        self.always = tuple(always)

    def project(self, data: Union[Mapping, list, tuple], fields: Optional[Iterable[str]] = None) -> Union[dict, list]:
        """
        :param data: item or list of items
        :param fields: requested field names, None for all fields
        :return: pruned item or list of pruned items
        """
        if isinstance(data, (list, tuple)):
            return [self.project_item(item, fields) for item in data]
        return self.project_item(data, fields)

    def project_item(self, item: Mapping, fields: Optional[Iterable[str]] = None) -> dict:
        if fields is None:
            return dict(item)
        selected = set(fields).union(self.always)
        return {name: value for name, value in item.items() if name in selected}
