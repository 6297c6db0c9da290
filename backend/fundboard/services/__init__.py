"""Service Layer — IO orchestration around the pure core.

Invariants:
    - Services receive their session/client from the caller (routes or tests)
    - Domain rules stay in core/; services load, apply, persist
"""
