"""
Domain layer - Business logic and domain models.

This layer contains:
- Value objects (immutable, self-validating)
- Domain entities (with business rules)
- Domain exceptions

No dependencies on web frameworks or transport clients.
"""
