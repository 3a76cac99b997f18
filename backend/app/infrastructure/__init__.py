"""Infrastructure Layer — database, credential primitives and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over SQLAlchemy, passlib and python-jose: one place to
      swap a backend, one place to map its errors
"""
