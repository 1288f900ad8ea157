"""
Application package initializer.

This package contains the FastAPI entrypoint and its submodules: the
``core`` helpers (configuration, logging, database access and error
types), pydantic ``schemas``, the ``services`` layer holding the roster
business rules, and the versioned HTTP routers under ``api``.
"""
