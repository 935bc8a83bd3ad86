import pytest
import contentws
from contentws import create_app
from contentws.models import Content, User


@pytest.fixture
def app(tmp_path):
    config = {
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "TESTING": True,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "UPLOAD_URL": "uploads/",
    }
    app = create_app(config)
    yield app
    with app.app_context():
        contentws.DB.session.remove()
        contentws.DB.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_content(app):
    """
    :return: function adding a Content row, returns the new id
    """

    def _add_content(**kwargs):
        with app.app_context():
            content = Content(**kwargs)
            contentws.DB.session.add(content)
            contentws.DB.session.commit()
            return content.content_id

    return _add_content


@pytest.fixture
def user_id(app):
    with app.app_context():
        user = User(name="author", email="author@example.org")
        contentws.DB.session.add(user)
        contentws.DB.session.commit()
        return user.id
