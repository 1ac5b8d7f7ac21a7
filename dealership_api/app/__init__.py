"""
Application package initializer.

The project is organised into layers: ``api`` maps HTTP requests to
service calls, ``services`` holds business rules and transaction
boundaries, ``repositories`` issues the SQL, and ``core`` carries
configuration, logging and database plumbing.  Each domain
(dealerships, car models, car prices) has a module in every layer.
"""

from .main import app  # noqa: F401
