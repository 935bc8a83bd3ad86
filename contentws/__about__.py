__version__ = "1.0.0"
__description__ = "contentws : content web service on Flask-Restful and SqlAlchemy"
