"""
Service layer.

Each service encapsulates the business logic of one domain.  Services
that act for a specific user (memberships, tasks) are instantiated per
request with that user's id and a database connection; the rest expose
class methods that manage their own connections.
"""
