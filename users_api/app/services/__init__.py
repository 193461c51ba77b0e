"""
Service layer.

Each module holds stateless logic except ``user_service``, whose
``UserService`` wraps the repository instance it is given.  Keeping the
logic here lets the routes stay thin and the behaviour testable
without an HTTP transport.
"""
