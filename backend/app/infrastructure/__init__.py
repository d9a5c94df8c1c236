"""Infrastructure Layer — store adapters, the session provider and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - Every SQLAlchemy failure is rolled back and mapped to StoreError (or reported
      as a value by the session provider)
"""
