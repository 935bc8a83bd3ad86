"""
Generic resource controller

A single controller serves every exposed collection, the ResourceDescriptor tells it
which fields to accept and which store to call. Each operation runs the same steps:

1. init: parse the suppress_response_codes flag, resolve the fields (or parse the
   collection query), check the user and save the uploaded media
2. validate: if errors were collected, respond with the list of errors, nothing is stored
3. execute: call the backing store
4. project: prune the returned fields

Every operation returns a (body, http status) tuple, the http layer serializes the body.
Malformed parameters raise ValidationError, store faults raise GenericError.
"""
from http import HTTPStatus
from typing import Iterable, Mapping, Optional, Tuple
import contentws
from .config import get_int_config
from .descriptor import ResourceDescriptor
from .error_collector import ErrorCollector, parse_suppress_flag
from .errors import MEDIA_SAVE_FAILED, METHOD_DISABLED, UNKNOWN_USER, ValidationError
from .fields import resolve_fields
from .list_query import ListQueryParser
from .media import MediaStorage
from .projection import FieldProjector

NO_CONTENT = "No such content"
USER_FIELD = "user_id"
MEDIA_FIELD = "media"


class ResourceController:
    """
    :param descriptor: the exposed resource
    :param list_parser: ListQueryParser, created from the DEFAULT_LIMIT, MAX_RESULTS
        DEFAULT_OFFSET and MAX_OFFSET configuration when omitted
    :param media_storage: MediaStorage used to save uploaded files
    """

    def __init__(
        self, descriptor: ResourceDescriptor, list_parser: Optional[ListQueryParser] = None, media_storage: Optional[MediaStorage] = None
    ) -> None:
        self.descriptor = descriptor
        self.store = descriptor.store
        self.list_parser = list_parser
        self.media_storage = media_storage if media_storage is not None else MediaStorage()
        self.id_projector = FieldProjector(always=(descriptor.id_field,))

    def get_list_parser(self) -> ListQueryParser:
        if self.list_parser is None:
            self.list_parser = ListQueryParser(
                default_limit=get_int_config("DEFAULT_LIMIT"),
                max_results=get_int_config("MAX_RESULTS"),
                default_offset=get_int_config("DEFAULT_OFFSET"),
                max_offset=get_int_config("MAX_OFFSET"),
            )
        return self.list_parser

    @staticmethod
    def error_response(collector: ErrorCollector) -> Tuple[list, int]:
        return collector.get_errors(), collector.get_response_code()

    def disabled_response(self, collector: ErrorCollector, path: str) -> Tuple[list, int]:
        collector.add_error(METHOD_DISABLED, [path])
        return self.error_response(collector)

    def resolve_user(self, params: Mapping[str, str], collector: ErrorCollector) -> Optional[str]:
        """
        :return: the user_id request parameter if it names an existing user
        """
        user_id = params.get(USER_FIELD)
        if user_id is None:
            return None
        if not self.store.user_exists(user_id):
            collector.add_error(UNKNOWN_USER, [user_id])
            return None
        return user_id

    def save_media(self, attachments: Iterable, collector: ErrorCollector) -> Optional[str]:
        """
        Media is only saved if the request is valid so far

        :return: json media map or None if there's nothing to save
        """
        attachments = list(attachments or [])
        if not self.descriptor.accepts_media or not attachments or collector.errors_exist():
            return None
        try:
            return self.media_storage.save(attachments)
        except OSError as exc:
            contentws.log.exception(exc)
            collector.add_error(MEDIA_SAVE_FAILED, [str(exc)])
        return None

    def discard_media(self, media: Optional[str]) -> None:
        """
        Remove the saved media of a request that didn't store it
        """
        if media is not None:
            self.media_storage.delete(media)

    def get(self, params: Mapping[str, str], route: str = "", path: str = "") -> Tuple[object, int]:
        """
        :param params: request parameters
        :param route: url path following the collection url, eg. "12.json"
        :param path: request url path, used in error arguments
        :return: item, list of items or NO_CONTENT and the http status
        """
        collector = ErrorCollector(parse_suppress_flag(params))
        if self.descriptor.is_disabled("get"):
            return self.disabled_response(collector, path)

        query, errors = self.get_list_parser().parse(params, route)
        if errors:
            messages = "; ".join(f"{error.args[0]}: {error.args[1]}" for error in errors)
            raise ValidationError(messages, errors=errors)

        if query.is_collection:
            data = self.store.get_list(query)
        else:
            data = self.store.get_item(query)

        if not data:
            return NO_CONTENT, HTTPStatus.OK.value

        return FieldProjector().project(data, query.fields), HTTPStatus.OK.value

    def create(self, params: Mapping[str, str], attachments: Iterable = (), path: str = "") -> Tuple[object, int]:
        """
        :param params: request parameters
        :param attachments: uploaded files
        :param path: request url path, used in error arguments
        :return: {"id": <new id>} or the list of errors, and the http status
        """
        collector = ErrorCollector(parse_suppress_flag(params))
        if self.descriptor.is_disabled("create"):
            return self.disabled_response(collector, path)

        resolved, errors = resolve_fields(self.descriptor.create_schema, self.descriptor.alternatives, params)
        collector.extend(errors)
        user_id = self.resolve_user(params, collector)
        fields = resolved.as_dict()
        fields.pop(USER_FIELD, None)
        media = self.save_media(attachments, collector)
        if media is not None:
            fields[MEDIA_FIELD] = media

        if collector.errors_exist():
            return self.error_response(collector)

        try:
            item = self.store.create_item(fields, user_id=user_id)
        except Exception:
            self.discard_media(media)
            raise
        return self.id_projector.project(item, []), HTTPStatus.OK.value

    def get_key_field(self, mandatory: Mapping[str, str]) -> Optional[str]:
        """
        :param mandatory: resolved mandatory fields
        :return: the field identifying the item to update, the id or one of its substitutes
        """
        id_field = self.descriptor.id_field
        if id_field in mandatory:
            return id_field
        for alternative in self.descriptor.alternatives:
            if alternative.trigger_field == id_field and alternative.substitute_field in mandatory:
                return alternative.substitute_field
        return None

    def update(self, params: Mapping[str, str], route: str = "", attachments: Iterable = (), path: str = "") -> Tuple[object, int]:
        """
        :param params: request parameters
        :param route: url path following the collection url, the item id may be passed here
        :param attachments: uploaded files
        :param path: request url path, used in error arguments
        :return: {"id": <id or None>} or the list of errors, and the http status
        """
        collector = ErrorCollector(parse_suppress_flag(params))
        if self.descriptor.is_disabled("update"):
            return self.disabled_response(collector, path)

        id_field = self.descriptor.id_field
        route_id = ListQueryParser.get_id(route)
        if params.get(id_field) is None and route_id not in (None, "*"):
            params = dict(params)
            params[id_field] = route_id

        resolved, errors = resolve_fields(self.descriptor.update_schema, self.descriptor.alternatives, params)
        collector.extend(errors)
        user_id = self.resolve_user(params, collector)
        fields = resolved.as_dict()
        fields.pop(USER_FIELD, None)
        media = self.save_media(attachments, collector)
        if media is not None:
            fields[MEDIA_FIELD] = media

        if collector.errors_exist():
            return self.error_response(collector)

        key = self.get_key_field(resolved.mandatory)
        if key is None:
            # the update schema doesn't declare the id as mandatory
            self.discard_media(media)
            return {id_field: None}, HTTPStatus.OK.value

        try:
            item = self.store.update_item(key, fields.pop(key), fields, user_id=user_id)
        except Exception:
            self.discard_media(media)
            raise
        if item is None:
            self.discard_media(media)
            return {id_field: None}, HTTPStatus.OK.value

        return self.id_projector.project(item, []), HTTPStatus.OK.value
