"""CommerceSession ORM — offline OAuth session for one shop.

Invariants:
    - id is "offline_{shop}", one row per shop
    - access_token is never returned by any route
    - A repeated install overwrites the previous token
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from fundboard.db.base import Base


def offline_session_id(shop: str) -> str:
    return f"offline_{shop}"


class CommerceSession(Base):
    """Stored result of a completed OAuth handshake."""
    __tablename__ = "commerce_sessions"

    id: Mapped[str] = mapped_column(String(300), primary_key=True)
    shop: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    scope: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
