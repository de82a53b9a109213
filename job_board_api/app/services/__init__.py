"""
Service layer.

Each service encapsulates the business rules for one domain and works
against the entity store from ``core.store``.  API handlers only
translate HTTP into service calls and service errors into HTTP
responses, so the same rules apply to any other transport.
"""
