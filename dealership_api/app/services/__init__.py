"""
Service layer abstraction.

Each service encapsulates the business rules for a domain and owns
the transaction boundary of every call: it opens a connection, runs
repository queries, commits writes and closes the connection.  API
handlers only ever talk to services.
"""
