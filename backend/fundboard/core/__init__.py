"""Core Layer — pure domain logic: items, metrics, codecs, OAuth primitives.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs (ids take an injectable clock)
"""
