#!/usr/bin/env python
#
# This is a demo application to demonstrate the functionality of the contentws REST API
#
# It can be ran standalone like this:
# python demo.py [Listener-IP]
#
# This will run the example on http://Listener-Ip:5000
#
# - An in-memory database is created, a user and some content is added
# - The content collections are available on /v1/content, /v1/articles, /v1/tags and /v1/media
#
# Try:
#   curl "http://127.0.0.1:5000/v1/articles?fields=id,title&order=-title"
#   curl -X POST "http://127.0.0.1:5000/v1/articles?title=Hello&body=World&user_id=1"
#   curl -X POST "http://127.0.0.1:5000/v1/articles?body=World"
#
import sys
from contentws import DB, create_app
from contentws.models import Content, User


def populate(app):
    with app.app_context():
        user = User(name="admin", email="admin@example.org")
        DB.session.add(user)
        DB.session.flush()
        for i in range(5):
            DB.session.add(Content(type="article", title=f"article {i}", alias=f"article-{i}", body=f"body {i}", created_user_id=user.id))
        DB.session.add(Content(type="tag", title="news", alias="news"))
        DB.session.commit()


def create_demo_app():
    app = create_app({"SQLALCHEMY_DATABASE_URI": "sqlite://", "DEBUG": True})
    populate(app)
    return app


# Address where the api will be hosted, change this if you're not running the app on localhost!
host = sys.argv[1] if sys.argv[1:] else "127.0.0.1"
app = create_demo_app()

if __name__ == "__main__":
    app.run(host=host)
