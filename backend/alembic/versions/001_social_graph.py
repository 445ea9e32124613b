"""Initial schema — users, user_relations, friend_requests.

Revision ID: 001_social_graph
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_social_graph"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("identity_ref", sa.String(320), nullable=False),
        sa.Column("public_id", sa.String(200), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=False),
        sa.Column("picture", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("identity_ref", name="uq_users_identity_ref"),
        sa.UniqueConstraint("public_id", name="uq_users_public_id"),
    )

    op.create_table(
        "user_relations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id", sa.String(200),
            sa.ForeignKey("users.public_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("target_id", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "owner_id", "kind", "target_id", name="uq_user_relations_member",
        ),
    )

    op.create_table(
        "friend_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("from_id", sa.String(200), nullable=False),
        sa.Column("to_id", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("from_id", "to_id", name="uq_friend_requests_pair"),
    )
    op.create_index("ix_friend_requests_from_id", "friend_requests", ["from_id"])
    op.create_index("ix_friend_requests_to_id", "friend_requests", ["to_id"])


def downgrade() -> None:
    op.drop_index("ix_friend_requests_to_id", table_name="friend_requests")
    op.drop_index("ix_friend_requests_from_id", table_name="friend_requests")
    op.drop_table("friend_requests")
    op.drop_table("user_relations")
    op.drop_table("users")
