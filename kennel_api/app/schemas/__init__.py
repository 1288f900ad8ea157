"""
Pydantic schema definitions for API payloads.

Schemas are separated from the ``dogs`` table layout to decouple the
API representation (camelCase JSON keys) from persistence (snake_case
columns).
"""
