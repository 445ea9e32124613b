"""UserRelation ORM — one member of a user's friends or exclusions set.

Invariants:
    - (owner_id, kind, target_id) is unique: a set never holds duplicates
    - kind is one of RelationKind: friend, exclusion
    - Friendship symmetry is maintained by the engine (two rows), not by the schema

Design Decisions:
    - owner_id references users.public_id with cascade delete: removing a user
      drops the sets they own; rows in other users' sets that point AT the
      deleted user are left in place (batch profile lookup omits unknown ids)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from social_graph.db.base import Base


class UserRelation(Base):
    """Set membership row for a user's friends or exclusions."""
    __tablename__ = "user_relations"
    __table_args__ = (
        UniqueConstraint(
            "owner_id", "kind", "target_id", name="uq_user_relations_member",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(
        String(200),
        ForeignKey("users.public_id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    target_id: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
