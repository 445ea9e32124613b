"""SQL Relationship Store — users, set-valued relations and pending requests on SQLAlchemy.

Invariants:
    - Every public method is one atomic unit: it commits (or rolls back) before returning
    - add_to_set / remove_from_set are idempotent (unique constraint + delete-by-value)
    - insert_request raises RequestConflictError on an existing (from_id, to_id) pair
    - delete_request / remove_from_set report how many rows they removed
    - Unexpected SQLAlchemy errors surface as DatabaseError with a generic message

Design Decisions:
    - Uniqueness enforced by the database (uq_friend_requests_pair,
      uq_user_relations_member), never by read-then-write: racing writers resolve
      to exactly one winner without locks
    - Commit per primitive, no cross-record transaction: callers compose idempotent
      steps so a partial failure is healed by retrying the whole operation
    - Returns frozen records (core.domain_types), never ORM instances, so nothing
      outside the store can lazy-load or mutate persistent state
"""

import logging
import uuid
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social_graph.core.domain_types import (
    FriendRequestRecord,
    IdentityRef,
    Page,
    PublicId,
    RelationKind,
    UserRecord,
)
from social_graph.core.errors import (
    DatabaseError,
    RequestConflictError,
    UserExistsError,
)
from social_graph.core.profile_projection import encode_picture
from social_graph.models.friend_request import FriendRequest
from social_graph.models.user import User
from social_graph.models.user_relation import UserRelation

logger = logging.getLogger(__name__)


def _to_request_record(row: FriendRequest) -> FriendRequestRecord:
    return FriendRequestRecord(
        from_id=PublicId(row.from_id),
        to_id=PublicId(row.to_id),
        created_at=row.created_at,
    )


def _to_user_record(user: User, relations: dict[str, list[str]]) -> UserRecord:
    return UserRecord(
        internal_key=str(user.id),
        identity_ref=IdentityRef(user.identity_ref),
        public_id=PublicId(user.public_id),
        display_name=user.display_name,
        picture=user.picture,
        friends=tuple(relations.get(RelationKind.FRIEND.value, ())),
        exclusions=tuple(relations.get(RelationKind.EXCLUSION.value, ())),
        created_at=user.created_at,
    )


class SqlRelationshipStore:
    """RelationshipStore implementation over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        """Roll back and map unexpected SQLAlchemy failures to DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Store operation failed: {e}",
                extra={"operation": operation},
            )
            raise DatabaseError(operation)

    # ─── Users ──────────────────────────────────────────────────

    async def _load_relations(
        self, owner_ids: list[str],
    ) -> dict[str, dict[str, list[str]]]:
        if not owner_ids:
            return {}
        result = await self.db.execute(
            select(UserRelation)
            .where(UserRelation.owner_id.in_(owner_ids))
            .order_by(UserRelation.created_at, UserRelation.target_id),
        )
        relations: dict[str, dict[str, list[str]]] = defaultdict(
            lambda: defaultdict(list),
        )
        for row in result.scalars().all():
            relations[row.owner_id][row.kind].append(row.target_id)
        return relations

    async def _find_one(self, operation: str, condition) -> UserRecord | None:
        async with self._guard(operation):
            result = await self.db.execute(select(User).where(condition))
            user = result.scalar_one_or_none()
            if user is None:
                return None
            relations = await self._load_relations([user.public_id])
        return _to_user_record(user, relations.get(user.public_id, {}))

    async def find_user_by_public_id(self, public_id: PublicId) -> UserRecord | None:
        return await self._find_one(
            "find_user_by_public_id", User.public_id == public_id,
        )

    async def find_user_by_identity_ref(
        self, identity_ref: IdentityRef,
    ) -> UserRecord | None:
        return await self._find_one(
            "find_user_by_identity_ref", User.identity_ref == identity_ref,
        )

    async def find_users_by_public_ids(
        self, public_ids: list[PublicId],
    ) -> list[UserRecord]:
        """Return the users that exist; unknown ids are silently skipped."""
        if not public_ids:
            return []
        async with self._guard("find_users_by_public_ids"):
            result = await self.db.execute(
                select(User).where(User.public_id.in_(list(dict.fromkeys(public_ids)))),
            )
            users = result.scalars().all()
            relations = await self._load_relations([u.public_id for u in users])
        return [_to_user_record(u, relations.get(u.public_id, {})) for u in users]

    async def create_user(
        self,
        identity_ref: IdentityRef,
        display_name: str,
        picture: bytes | str | None = None,
        public_id: PublicId | None = None,
    ) -> UserRecord:
        """Insert a new user. Raises UserExistsError on identity/public_id collision."""
        user = User(
            identity_ref=identity_ref,
            public_id=public_id or uuid.uuid4().hex,
            display_name=display_name,
            picture=encode_picture(picture),
        )
        async with self._guard("create_user"):
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise UserExistsError(identity_ref)
        logger.info("User created", extra={"public_id": user.public_id})
        return _to_user_record(user, {})

    # ─── Friend requests ────────────────────────────────────────

    async def request_exists(self, from_id: PublicId, to_id: PublicId) -> bool:
        async with self._guard("request_exists"):
            result = await self.db.execute(
                select(FriendRequest.id)
                .where(FriendRequest.from_id == from_id)
                .where(FriendRequest.to_id == to_id)
                .limit(1),
            )
            return result.scalar_one_or_none() is not None

    async def insert_request(
        self, from_id: PublicId, to_id: PublicId, created_at: datetime | None = None,
    ) -> FriendRequestRecord:
        """Conditional insert guarded by the (from_id, to_id) unique constraint."""
        row = FriendRequest(
            from_id=from_id,
            to_id=to_id,
            created_at=created_at or datetime.now(timezone.utc),
        )
        async with self._guard("insert_request"):
            self.db.add(row)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise RequestConflictError(from_id, to_id)
        return _to_request_record(row)

    async def delete_request(self, from_id: PublicId, to_id: PublicId) -> int:
        async with self._guard("delete_request"):
            result = await self.db.execute(
                delete(FriendRequest)
                .where(FriendRequest.from_id == from_id)
                .where(FriendRequest.to_id == to_id)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        return result.rowcount or 0

    async def _find_requests(
        self, operation: str, condition, page: Page,
    ) -> list[FriendRequestRecord]:
        async with self._guard(operation):
            result = await self.db.execute(
                select(FriendRequest)
                .where(condition)
                .order_by(FriendRequest.created_at.desc())
                .limit(page.limit)
                .offset(page.offset),
            )
            rows = result.scalars().all()
        return [_to_request_record(r) for r in rows]

    async def find_requests_by_to(
        self, to_id: PublicId, page: Page,
    ) -> list[FriendRequestRecord]:
        return await self._find_requests(
            "find_requests_by_to", FriendRequest.to_id == to_id, page,
        )

    async def find_requests_by_from(
        self, from_id: PublicId, page: Page,
    ) -> list[FriendRequestRecord]:
        return await self._find_requests(
            "find_requests_by_from", FriendRequest.from_id == from_id, page,
        )

    # ─── Set-valued fields ──────────────────────────────────────

    async def add_to_set(
        self, owner_id: PublicId, kind: RelationKind, value: PublicId,
    ) -> bool:
        """Idempotent add. Returns False when the member was already present."""
        row = UserRelation(owner_id=owner_id, kind=kind.value, target_id=value)
        async with self._guard("add_to_set"):
            self.db.add(row)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                return False
        return True

    async def remove_from_set(
        self, owner_id: PublicId, kind: RelationKind, value: PublicId,
    ) -> int:
        """Idempotent remove. Returns the number of members removed (0 or 1)."""
        async with self._guard("remove_from_set"):
            result = await self.db.execute(
                delete(UserRelation)
                .where(UserRelation.owner_id == owner_id)
                .where(UserRelation.kind == kind.value)
                .where(UserRelation.target_id == value)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        return result.rowcount or 0
