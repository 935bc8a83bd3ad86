#
# SQLAlchemy models backing the content resources
#
import datetime
from .ws_init import DB as db


def sql_now():
    """
    :return: the current time with the precision of an sql DATETIME column
    """
    return datetime.datetime.now().replace(microsecond=0)


class User(db.Model):
    """
    Content authors, referenced by the user_id request parameter
    """

    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), default="")
    email = db.Column(db.String(255), default="")


class Content(db.Model):
    """
    All content types (general content, articles, tags, media) share this table,
    the "type" column tells them apart
    """

    __tablename__ = "content"
    content_id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(50), nullable=False, default="general", index=True)
    title = db.Column(db.String(255), default="")
    alias = db.Column(db.String(255), unique=True)
    body = db.Column(db.Text, default="")
    access = db.Column(db.Integer, default=1)
    featured = db.Column(db.Integer, default=0)
    language = db.Column(db.String(7), default="*")
    media = db.Column(db.Text)
    created_user_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_date = db.Column(db.DateTime, default=sql_now, index=True)
    modified_user_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    modified_date = db.Column(db.DateTime, default=sql_now, onupdate=sql_now)
