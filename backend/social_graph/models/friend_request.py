"""FriendRequest ORM — one pending directed friend request.

Invariants:
    - (from_id, to_id) is unique: at most one pending request per ordered pair
    - Rows are never updated in place; approve/reject/cancel delete them
    - from_id and to_id indexed individually for incoming/outgoing listing

Design Decisions:
    - No foreign keys to users: a request may outlive its sender, approval then
      reports the sender as not found
    - Reverse-direction rows (B→A while A→B pending) are allowed; approval removes both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from social_graph.db.base import Base


class FriendRequest(Base):
    """Pending request from from_id to to_id."""
    __tablename__ = "friend_requests"
    __table_args__ = (
        UniqueConstraint("from_id", "to_id", name="uq_friend_requests_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    from_id: Mapped[str] = mapped_column(
        String(200), nullable=False, index=True,
    )
    to_id: Mapped[str] = mapped_column(
        String(200), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
