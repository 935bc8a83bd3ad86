"""
Resource descriptors

A ResourceDescriptor declares everything the generic ResourceController needs to serve a
collection: the accepted fields, the backing store and the enabled HTTP verbs.
WebServiceAPI.expose_resource creates the flask-restful endpoints for it.
"""
from typing import Iterable, Optional, Sequence
from .fields import AlternativeRule, FieldSchema
from .store import ContentStore

# HTTP verb -> controller operation
VERB_OPERATIONS = {"GET": "get", "POST": "create", "PUT": "update", "PATCH": "update"}


class ResourceDescriptor:
    """
    :param name: collection name, used in the url, eg. "articles"
    :param store: ContentStore holding the items
    :param create_schema: fields accepted when creating an item
    :param update_schema: fields accepted when updating an item
    :param alternatives: alternative rules, in order of precedence
    :param http_methods: enabled HTTP methods, other methods answer 405
    :param disabled: operations ("get", "create", "update") that are routed but answer error 601
    :param accepts_media: whether uploaded files are saved in the "media" field
    :param id_field: public name of the item identifier
    """

    def __init__(
        self,
        name: str,
        store: ContentStore,
        create_schema: Optional[FieldSchema] = None,
        update_schema: Optional[FieldSchema] = None,
        alternatives: Sequence[AlternativeRule] = (),
        http_methods: Iterable[str] = ("GET", "POST", "PUT", "PATCH"),
        disabled: Iterable[str] = (),
        accepts_media: bool = False,
        id_field: str = "id",
    ) -> None:
        self.name = name
        self.store = store
        self.create_schema = create_schema if create_schema is not None else FieldSchema()
        self.update_schema = update_schema if update_schema is not None else FieldSchema()
        self.alternatives = tuple(alternatives)
        self.http_methods = [method.upper() for method in http_methods]
        self.disabled = set(disabled)
        self.accepts_media = accepts_media
        self.id_field = id_field

        for method in self.http_methods:
            if method not in VERB_OPERATIONS:
                raise ValueError(f"Unsupported HTTP method {method} for {name}")

    def is_disabled(self, operation: str) -> bool:
        return operation in self.disabled

    def __repr__(self) -> str:
        return f"<ResourceDescriptor {self.name}>"
