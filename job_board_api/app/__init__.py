"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, security primitives and the entity store,
``services`` holds the business rules for each domain (users, jobs,
applications, statistics) and ``api`` exposes them over versioned
routers defined in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
