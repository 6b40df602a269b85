"""
Service layer abstraction.

Each service encapsulates the queries for a domain and is bound to
the store client it was constructed with, keeping SQL out of the API
handlers.
"""
