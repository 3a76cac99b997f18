"""Services Layer — stores, credential flows, order coordination and reporting.

Invariants:
    - Stores take an AsyncSession and never commit
    - Credential service and order coordinator own their transaction boundaries
    - Role checks happen in the API layer before a service is called

Design Decisions:
    - One class per component, instantiated per request with the request's session
"""
