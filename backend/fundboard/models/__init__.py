"""ORM Models — SQLAlchemy declarative models for persisted state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - One file per table
"""

from fundboard.models.storage_entry import StorageEntry  # noqa: F401
from fundboard.models.commerce_session import CommerceSession  # noqa: F401
