"""StorageEntry ORM — one browser's local-storage value for one key.

Invariants:
    - (client_id, key) is the primary key: one value per client per key
    - value is raw text, possibly malformed; decoding happens in the store
    - Writes overwrite (last writer wins); no versioning

Design Decisions:
    - Text column, not JSON: malformed content must be storable and readable
      so hydration can detect it and fall back
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from fundboard.db.base import Base


class StorageEntry(Base):
    """Key/value row scoped by client id."""
    __tablename__ = "storage_entries"

    client_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
