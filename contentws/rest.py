#  This file contains the flask-restful "Resource" serving the exposed collections.
#
#  WebServiceAPI.expose_resource creates a subclass for every ResourceDescriptor:
#
#    class articles_API(ContentRestAPI):
#        descriptor = <ResourceDescriptor articles>
#        methods = {"GET", "POST", "PUT", "PATCH"}
#
#  The HTTP methods translate the flask request to a ResourceController call:
#  GET -> get, POST -> create, PUT/PATCH -> update
#
from flask import request
from flask_restful import Resource
from .controller import ResourceController


class ContentRestAPI(Resource):
    """
    Collection endpoint: /<collection> and /<collection>/<route>
    """

    # descriptor: the ResourceDescriptor of the exposed collection,
    # set by WebServiceAPI.expose_resource
    descriptor = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.controller = ResourceController(self.descriptor)

    def get(self, route=""):
        """
        HTTP GET: return an item (/<collection>/<id>) or a list of items (/<collection>)
        """
        return self.controller.get(request.params, route, path=request.path)

    def post(self, route=""):
        """
        HTTP POST: create an item
        """
        return self.controller.create(request.params, request.attachments, path=request.path)

    def put(self, route=""):
        """
        HTTP PUT: update an item, identified by the id in the route or the parameters
        """
        return self.controller.update(request.params, route, request.attachments, path=request.path)

    def patch(self, route=""):
        """
        HTTP PATCH: same as PUT, only the supplied fields are updated
        """
        return self.controller.update(request.params, route, request.attachments, path=request.path)
