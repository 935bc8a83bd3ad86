# Backing stores
#
# The controllers don't know how content is persisted, they call a ContentStore:
# - get_item / get_list : retrieve items as ordered dicts of public field name -> value
# - create_item / update_item : write the resolved request fields
# - user_exists : validate the user_id request parameter
#
# SQLAContentStore implements the store with a Flask-SQLAlchemy model. Public field names
# are mapped to column names with `field_map`, eg. {"id": "content_id"}
#
import datetime
import sqlalchemy
import contentws
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Mapping, Optional
from .errors import GenericError, ValidationError
from .list_query import ListQuery, MAX_INTEGER, SQL_DATE_FORMAT, DATE_FORMATS


class ContentStore:
    """
    Backing store interface
    """

    def get_item(self, query: ListQuery) -> Optional[dict]:
        """
        :param query: query with a numeric id
        :return: the item or None if it doesn't exist
        """
        raise NotImplementedError

    def get_list(self, query: ListQuery) -> list:
        """
        :param query: collection query (offset, limit, order, since, before)
        :return: list of items
        """
        raise NotImplementedError

    def create_item(self, fields: Mapping[str, str], user_id: Optional[str] = None) -> dict:
        """
        :param fields: resolved request fields
        :param user_id: id of the user creating the item
        :return: the created item
        """
        raise NotImplementedError

    def update_item(self, key: str, value: str, fields: Mapping[str, str], user_id: Optional[str] = None) -> Optional[dict]:
        """
        :param key: field identifying the item, eg. "id" or "alias"
        :param value: value of the key field
        :param fields: resolved request fields
        :param user_id: id of the user updating the item
        :return: the updated item or None if it doesn't exist
        """
        raise NotImplementedError

    def user_exists(self, user_id: str) -> bool:
        raise NotImplementedError


def parse_column_value(column: sqlalchemy.Column, name: str, value: Any) -> Any:
    """
    Parse the supplied request string so it can be saved in the SQLAlchemy `column`

    :param column: SQLAlchemy column
    :param name: public field name, used in error messages
    :param value: request value
    :return: processed value
    """
    if value is None:
        return value

    try:
        python_type = column.type.python_type
    except NotImplementedError:
        # custom column type: leave the parsing to the type itself
        return value

    if python_type in (datetime.datetime, datetime.date):
        for date_format in DATE_FORMATS:
            try:
                result = datetime.datetime.strptime(str(value).strip(), date_format)
            except ValueError:
                continue
            return result if python_type == datetime.datetime else result.date()
        raise ValidationError(f'Invalid date "{value}" for {name}')

    if python_type == bool:
        return str(value).lower() in ("1", "true", "yes")

    try:
        result = python_type(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid value "{value}" for {name}')
    if python_type == int and abs(result) > MAX_INTEGER:
        raise ValidationError(f'Value "{value}" for {name} is out of range')
    return result


class SQLAContentStore(ContentStore):
    """
    ContentStore for a Flask-SQLAlchemy model

    :param model: sqla model class
    :param content_type: value of the model "type" column, None to query all types
    :param create_type: "type" of created items, defaults to `content_type`
    :param field_map: public field name -> model attribute name
    :param default_order: order used when the client doesn't specify one
    :param date_field: public name of the field filtered by since/before
    :param user_field: public name of the field holding the creating user
    :param modified_user_field: public name of the field holding the last updating user
    """

    def __init__(
        self,
        model,
        content_type: Optional[str] = None,
        create_type: Optional[str] = None,
        field_map: Optional[Mapping[str, str]] = None,
        default_order=("id",),
        date_field: str = "created_date",
        user_field: Optional[str] = "user_id",
        modified_user_field: Optional[str] = "modified_user_id",
        user_model=None,
    ) -> None:
        self.model = model
        self.content_type = content_type
        self.create_type = create_type or content_type
        self.field_map = dict(field_map or {})
        self.default_order = list(default_order)
        self.date_field = date_field
        self.user_field = user_field
        self.modified_user_field = modified_user_field
        self.user_model = user_model
        self._attr_field_map = {attr: name for name, attr in self.field_map.items()}

    @property
    def session(self):
        return contentws.DB.session

    @property
    def columns(self) -> list:
        return list(self.model.__table__.columns)

    def map_in(self, field_name: str) -> str:
        """
        :param field_name: public field name, eg. "id"
        :return: model attribute name, eg. "content_id"
        """
        return self.field_map.get(field_name, field_name)

    def map_out(self, attr_name: str) -> str:
        return self._attr_field_map.get(attr_name, attr_name)

    def get_column(self, field_name: str) -> Optional[sqlalchemy.Column]:
        return self.model.__table__.columns.get(self.map_in(field_name))

    def to_item(self, instance) -> dict:
        """
        :param instance: model instance
        :return: dict of public field name -> value, in column order
        """
        return {self.map_out(column.key): getattr(instance, column.key) for column in self.columns}

    def _query(self):
        query = self.session.query(self.model)
        if self.content_type is not None:
            query = query.filter(self.model.type == self.content_type)
        return query

    def _instance_by(self, field_name: str, value: str):
        column = self.get_column(field_name)
        if column is None:
            raise GenericError(f"{self.model.__name__} has no field {field_name}")
        value = parse_column_value(column, field_name, value)
        return self._query().filter(column == value).first()

    def _execute(self, func, *args):
        try:
            return func(*args)
        except SQLAlchemyError as exc:
            contentws.log.exception(exc)
            raise GenericError(f"Query failed for {self.model.__name__}: {exc}")

    def get_item(self, query: ListQuery) -> Optional[dict]:
        instance = self._execute(self._instance_by, "id", query.id)
        if instance is None:
            return None
        return self.to_item(instance)

    def _sort(self, object_query, order):
        """
        :param object_query: sqla query object
        :param order: list of field names, a "-" prefix means descending
        :return: sorted sqla query object
        """
        for sort_field in order or self.default_order:
            reverse = sort_field.startswith("-")
            if reverse:
                sort_field = sort_field[1:]
            column = self.get_column(sort_field)
            if column is None:
                contentws.log.debug(f"{self.model.__name__} has no field {sort_field}, ignoring sort key")
                continue
            object_query = object_query.order_by(column.desc() if reverse else column)
        return object_query

    def _get_list(self, query: ListQuery) -> list:
        object_query = self._query()
        date_column = self.get_column(self.date_field)
        if date_column is not None:
            since = datetime.datetime.strptime(query.since, SQL_DATE_FORMAT)
            before = datetime.datetime.strptime(query.before, SQL_DATE_FORMAT) if query.before else datetime.datetime.now()
            object_query = object_query.filter(date_column >= since, date_column <= before)
        object_query = self._sort(object_query, query.order)
        instances = object_query.offset(query.offset).limit(query.limit).all()
        return [self.to_item(instance) for instance in instances]

    def get_list(self, query: ListQuery) -> list:
        return self._execute(self._get_list, query)

    def _set_fields(self, instance, fields: Mapping[str, str]) -> None:
        for field_name, value in fields.items():
            column = self.get_column(field_name)
            if column is None or column.primary_key:
                contentws.log.debug(f"Not setting {self.model.__name__}.{field_name}")
                continue
            setattr(instance, column.key, parse_column_value(column, field_name, value))

    def _create_item(self, fields: Mapping[str, str], user_id: Optional[str] = None) -> dict:
        instance = self.model()
        self._set_fields(instance, fields)
        if self.create_type is not None:
            instance.type = self.create_type
        if user_id is not None and self.user_field:
            self._set_fields(instance, {self.user_field: user_id})
        self.session.add(instance)
        # flush so the database generates the id, the request decorator commits
        self.session.flush()
        return self.to_item(instance)

    def create_item(self, fields: Mapping[str, str], user_id: Optional[str] = None) -> dict:
        return self._execute(self._create_item, fields, user_id)

    def _update_item(self, key: str, value: str, fields: Mapping[str, str], user_id: Optional[str] = None) -> Optional[dict]:
        instance = self._instance_by(key, value)
        if instance is None:
            return None
        self._set_fields(instance, {name: val for name, val in fields.items() if name != key})
        if user_id is not None and self.modified_user_field:
            self._set_fields(instance, {self.modified_user_field: user_id})
        self.session.flush()
        return self.to_item(instance)

    def update_item(self, key: str, value: str, fields: Mapping[str, str], user_id: Optional[str] = None) -> Optional[dict]:
        return self._execute(self._update_item, key, value, fields, user_id)

    def user_exists(self, user_id: str) -> bool:
        if self.user_model is None:
            return False
        try:
            user_id = int(str(user_id).strip())
        except ValueError:
            return False
        if not 0 < user_id <= MAX_INTEGER:
            return False
        return self._execute(self.session.get, self.user_model, user_id) is not None
