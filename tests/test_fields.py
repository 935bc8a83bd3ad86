import pytest

from contentws.errors import MISSING_FIELD
from contentws.fields import AlternativeRule, FieldSchema, resolve_fields

ALT_ID = AlternativeRule(trigger_field="id", condition_field="use_alt", substitute_field="alt_id")


def _codes(errors):
    return [(error.code, error.args) for error in errors]


def test_schema_rejects_duplicate_fields() -> None:
    with pytest.raises(ValueError):
        FieldSchema.from_fields(["title"], ["body", "title"])


def test_schema_keeps_declaration_order() -> None:
    schema = FieldSchema.from_fields(["title", "body"], ["alias", "language"])
    assert schema.mandatory == ["title", "body"]
    assert schema.optional == ["alias", "language"]
    assert list(schema) == ["title", "body", "alias", "language"]


def test_all_mandatory_fields_present() -> None:
    schema = FieldSchema.from_fields(["title", "body"])
    resolved, errors = resolve_fields(schema, [], {"title": "Hello", "body": "World", "other": "x"})
    assert errors == []
    assert dict(resolved.mandatory) == {"title": "Hello", "body": "World"}
    assert "other" not in resolved


@pytest.mark.parametrize("missing", ["title", "body", "alias"])
def test_one_missing_field_gives_one_error(missing: str) -> None:
    schema = FieldSchema.from_fields(["title", "body", "alias"])
    params = {"title": "t", "body": "b", "alias": "a"}
    del params[missing]
    resolved, errors = resolve_fields(schema, [], params)
    assert _codes(errors) == [(MISSING_FIELD, (missing,))]
    assert missing not in resolved


def test_every_missing_field_is_reported() -> None:
    schema = FieldSchema.from_fields(["title", "body"])
    _, errors = resolve_fields(schema, [], {})
    assert _codes(errors) == [(MISSING_FIELD, ("title",)), (MISSING_FIELD, ("body",))]


def test_alternative_replaces_missing_field() -> None:
    schema = FieldSchema.from_fields(["id"])
    resolved, errors = resolve_fields(schema, [ALT_ID], {"use_alt": "1", "alt_id": "42"})
    assert errors == []
    assert dict(resolved.mandatory) == {"alt_id": "42"}


def test_alternative_needs_the_substitute() -> None:
    schema = FieldSchema.from_fields(["id"])
    resolved, errors = resolve_fields(schema, [ALT_ID], {"use_alt": "1"})
    assert _codes(errors) == [(MISSING_FIELD, ("id",))]
    assert dict(resolved.mandatory) == {}


def test_alternative_needs_the_condition() -> None:
    schema = FieldSchema.from_fields(["id"])
    _, errors = resolve_fields(schema, [ALT_ID], {"alt_id": "42"})
    assert _codes(errors) == [(MISSING_FIELD, ("id",))]


def test_present_field_ignores_alternatives() -> None:
    schema = FieldSchema.from_fields(["id"])
    resolved, errors = resolve_fields(schema, [ALT_ID], {"id": "7", "use_alt": "1", "alt_id": "42"})
    assert errors == []
    assert dict(resolved.mandatory) == {"id": "7"}


def test_first_satisfied_alternative_wins() -> None:
    second = AlternativeRule(trigger_field="id", condition_field="use_alt", substitute_field="name")
    schema = FieldSchema.from_fields(["id"])
    resolved, _ = resolve_fields(schema, [ALT_ID, second], {"use_alt": "1", "alt_id": "42", "name": "n"})
    assert dict(resolved.mandatory) == {"alt_id": "42"}

    # the first rule isn't satisfied: the second one is used
    resolved, _ = resolve_fields(schema, [ALT_ID, second], {"use_alt": "1", "name": "n"})
    assert dict(resolved.mandatory) == {"name": "n"}


def test_substitute_is_not_resolved_twice() -> None:
    schema = FieldSchema.from_fields(["id", "alt_id"])
    resolved, errors = resolve_fields(schema, [ALT_ID], {"use_alt": "1", "alt_id": "42"})
    assert errors == []
    assert list(resolved.mandatory.items()) == [("alt_id", "42")]


def test_optional_fields_are_sparse() -> None:
    schema = FieldSchema.from_fields(optional=["title", "body"])
    resolved, errors = resolve_fields(schema, [], {})
    assert errors == []
    assert dict(resolved.optional) == {}

    resolved, _ = resolve_fields(schema, [], {"body": ""})
    assert dict(resolved.optional) == {"body": ""}


def test_resolved_fields_are_read_only() -> None:
    schema = FieldSchema.from_fields(["title"], ["body"])
    resolved, _ = resolve_fields(schema, [], {"title": "t", "body": "b"})
    with pytest.raises(TypeError):
        resolved.mandatory["title"] = "x"
    with pytest.raises(TypeError):
        resolved.optional["other"] = "x"
    assert resolved.as_dict() == {"title": "t", "body": "b"}
    assert resolved.get("body") == "b"
    assert resolved.get("missing", "default") == "default"
