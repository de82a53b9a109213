"""
Pydantic schema definitions for API payloads.

Each domain (users, jobs, applications, statistics) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the store's records to decouple the wire format
(camelCase JSON) from persistence (snake_case fields).
"""
