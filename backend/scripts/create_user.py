"""Provision a user (registration lives outside this service) and optionally print a dev token."""

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from social_graph.config import get_settings
from social_graph.core.domain_types import PublicId
from social_graph.core.errors import UserExistsError
from social_graph.core.normalize import normalize_identity
from social_graph.db.session import standalone_session
from social_graph.infrastructure.auth import issue_token
from social_graph.infrastructure.relationship_store import SqlRelationshipStore


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a social graph user")
    parser.add_argument("identity", help="External identity, e.g. the e-mail used as JWT sub")
    parser.add_argument("display_name", help="Name shown to other users")
    parser.add_argument("--public-id", default=None, help="Shareable handle (random if omitted)")
    parser.add_argument("--picture", default=None, help="Path to an image file to attach")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (defaults to DATABASE_URL / settings)",
    )
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Print a bearer token signed with JWT_SECRET for local testing",
    )
    return parser.parse_args()


async def _create(args: argparse.Namespace) -> int:
    settings = get_settings()
    picture = Path(args.picture).read_bytes() if args.picture else None
    async with standalone_session(
        args.database_url or settings.database_url, create_schema=True,
    ) as db:
        store = SqlRelationshipStore(db)
        try:
            user = await store.create_user(
                normalize_identity(args.identity),
                args.display_name.strip(),
                picture=picture,
                public_id=PublicId(args.public_id) if args.public_id else None,
            )
        except UserExistsError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1

    print(f"Created user {user.public_id}: {user.display_name} <{user.identity_ref}>")
    if args.print_token:
        print(issue_token(user.identity_ref, settings.jwt_secret, settings.jwt_algorithm))
    return 0


def main() -> int:
    return asyncio.run(_create(parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
