"""ORM Models — SQLAlchemy declarative models for users, relations and requests.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationships reference users by public_id, never by internal key

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from social_graph.models.user import User  # noqa: F401
from social_graph.models.user_relation import UserRelation  # noqa: F401
from social_graph.models.friend_request import FriendRequest  # noqa: F401
