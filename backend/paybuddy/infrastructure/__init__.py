"""Infrastructure Layer — database, hashing and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ domain logic beyond errors and protocols
    - All DB failures surfaced as typed errors

Design Decisions:
    - Concrete implementations of core protocols live here (BcryptHasher)
"""
