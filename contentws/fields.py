"""
Request field resolution

A resource declares which request parameters it accepts:
- mandatory fields must be present in the request, possibly through an alternative
- optional fields are copied when present and dropped otherwise, so an update
  never overwrites stored values with missing input
- alternatives let another parameter stand in for a missing mandatory field,
  eg. update by "alias" instead of by "id" when "use_alias" is passed:

    AlternativeRule(trigger_field="id", condition_field="use_alias", substitute_field="alias")
"""
from collections import OrderedDict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple
from .error_collector import Error
from .errors import ERROR_CODES, MISSING_FIELD


class FieldSchema(OrderedDict):
    """
    Ordered mapping of field name -> required flag
    """

    @classmethod
    def from_fields(cls, mandatory: Iterable[str] = (), optional: Iterable[str] = ()) -> "FieldSchema":
        """
        :param mandatory: names of the mandatory fields, in resolution order
        :param optional: names of the optional fields
        :return: FieldSchema
        :raise ValueError: a field is declared twice
        """
        schema = cls()
        for name, required in [(name, True) for name in mandatory] + [(name, False) for name in optional]:
            if name in schema:
                raise ValueError(f'Field "{name}" is declared more than once')
            schema[name] = required
        return schema

    @property
    def mandatory(self) -> list:
        return [name for name, required in self.items() if required]

    @property
    def optional(self) -> list:
        return [name for name, required in self.items() if not required]


@dataclass(frozen=True)
class AlternativeRule:
    """
    If `trigger_field` is missing and `condition_field` is present,
    `substitute_field` satisfies the `trigger_field` requirement
    """

    trigger_field: str
    condition_field: str
    substitute_field: str

    def applies_to(self, field_name: str, params: Mapping[str, str]) -> bool:
        return (
            self.trigger_field == field_name
            and params.get(self.condition_field) is not None
            and params.get(self.substitute_field) is not None
        )


@dataclass(frozen=True)
class ResolvedFields:
    """
    The request values of the resolved fields, read-only
    """

    mandatory: Mapping[str, str]
    optional: Mapping[str, str]

    def as_dict(self) -> dict:
        """
        :return: mandatory and optional values in a new dict
        """
        result = dict(self.mandatory)
        result.update(self.optional)
        return result

    def __contains__(self, name) -> bool:
        return name in self.mandatory or name in self.optional

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        if name in self.mandatory:
            return self.mandatory[name]
        return self.optional.get(name, default)


def find_alternative(field_name: str, alternatives: Sequence[AlternativeRule], params: Mapping[str, str]) -> Optional[AlternativeRule]:
    """
    :return: the first alternative that satisfies `field_name`, None if there's none
    """
    for alternative in alternatives:
        if alternative.applies_to(field_name, params):
            return alternative
    return None


def resolve_fields(
    schema: FieldSchema, alternatives: Sequence[AlternativeRule], params: Mapping[str, str]
) -> Tuple[ResolvedFields, list]:
    """
    Extract the schema fields from the request parameters

    :param schema: the resource fields
    :param alternatives: alternative rules, in order of precedence
    :param params: request parameters
    :return: resolved fields and the list of errors (one "308" error per unresolved mandatory field)
    """
    mandatory = OrderedDict()
    optional = OrderedDict()
    errors = []

    for field_name in schema.mandatory:
        if field_name in mandatory:
            # already resolved as the substitute of a previous field
            continue
        value = params.get(field_name)
        if value is not None:
            mandatory[field_name] = value
            continue

        alternative = find_alternative(field_name, alternatives, params)
        if alternative is not None:
            # the substitute replaces the missing field
            mandatory[alternative.substitute_field] = params[alternative.substitute_field]
            continue

        errors.append(Error(code=MISSING_FIELD, args=(field_name,), http_status=ERROR_CODES[MISSING_FIELD][1]))

    for field_name in schema.optional:
        value = params.get(field_name)
        if value is not None and field_name not in mandatory:
            optional[field_name] = value

    return ResolvedFields(mandatory=MappingProxyType(mandatory), optional=MappingProxyType(optional)), errors
