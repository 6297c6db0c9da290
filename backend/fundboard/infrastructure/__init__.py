"""Infrastructure Layer — database, commerce HTTP client, logging setup.

Invariants:
    - Infrastructure never imports domain logic beyond core/errors.py
    - All external failures mapped to typed errors before leaving this layer
"""
