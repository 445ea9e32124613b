"""User ORM — one row per registered identity.

Invariants:
    - id (internal key) is a UUID primary key, never exposed outside the store
    - identity_ref is unique and stored normalized (stripped, lower-cased)
    - public_id is unique, immutable once created, the only externally shared handle

Design Decisions:
    - friends / exclusions live in user_relations rather than array columns: one row
      per set member makes add/remove single-row atomic operations on any backend
    - picture as Text: provisioning stores a pre-encoded string (base64 or data URL)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from social_graph.db.base import Base


class User(Base):
    """Registered user — owner of friend and exclusion sets."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    identity_ref: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    public_id: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True,
    )
    display_name: Mapped[str] = mapped_column(
        String(200), nullable=False,
    )
    picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
