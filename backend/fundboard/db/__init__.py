"""Database Package — declarative Base shared by ORM models and alembic.

Invariants:
    - All tables hang off db.base.Base.metadata
"""
