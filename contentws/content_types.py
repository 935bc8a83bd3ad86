"""
The content collections served by the web service

    /v1/content   all content, new items are "general" content
    /v1/articles
    /v1/tags      tags can't be updated
    /v1/media     accepts uploaded files in the "screenshots" field
"""
from .descriptor import ResourceDescriptor
from .fields import AlternativeRule, FieldSchema
from .models import Content, User
from .store import SQLAContentStore

# public field name -> Content attribute
CONTENT_FIELD_MAP = {"id": "content_id", "user_id": "created_user_id"}

CONTENT_FIELDS = ["alias", "access", "featured", "language"]

# items can be updated by alias instead of id: ?use_alias=1&alias=my-article
UPDATE_BY_ALIAS = AlternativeRule(trigger_field="id", condition_field="use_alias", substitute_field="alias")


def content_store(content_type=None, create_type=None):
    return SQLAContentStore(
        Content,
        content_type=content_type,
        create_type=create_type,
        field_map=CONTENT_FIELD_MAP,
        default_order=("-created_date", "id"),
        user_model=User,
    )


def content_resource():
    return ResourceDescriptor(
        "content",
        content_store(create_type="general"),
        create_schema=FieldSchema.from_fields(["title", "body"], CONTENT_FIELDS),
        update_schema=FieldSchema.from_fields(["id"], ["title", "body"] + CONTENT_FIELDS),
        alternatives=[UPDATE_BY_ALIAS],
    )


def articles_resource():
    return ResourceDescriptor(
        "articles",
        content_store("article"),
        create_schema=FieldSchema.from_fields(["title", "body"], CONTENT_FIELDS),
        update_schema=FieldSchema.from_fields(["id"], ["title", "body"] + CONTENT_FIELDS),
        alternatives=[UPDATE_BY_ALIAS],
    )


def tags_resource():
    return ResourceDescriptor(
        "tags",
        content_store("tag"),
        create_schema=FieldSchema.from_fields(["title"], ["body", "alias", "language"]),
        disabled=["update"],
    )


def media_resource():
    return ResourceDescriptor(
        "media",
        content_store("media"),
        create_schema=FieldSchema.from_fields(["title"], ["body"] + CONTENT_FIELDS),
        update_schema=FieldSchema.from_fields(["id"], ["title", "body"] + CONTENT_FIELDS),
        alternatives=[UPDATE_BY_ALIAS],
        accepts_media=True,
    )


def content_resources() -> list:
    """
    :return: descriptors of all the content collections
    """
    return [content_resource(), articles_resource(), tags_resource(), media_resource()]
