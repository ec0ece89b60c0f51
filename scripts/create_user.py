"""Create a dashboard user (e.g. the first admin).

Usage:
    python -m scripts.create_user <username> [password] [--role admin] [--name "Full Name"]
If password is omitted, a random one is printed.
"""

import argparse
import asyncio
import secrets
import sys

from trackplan.application.dtos.user import UserCreate
from trackplan.application.use_cases.users import UserService
from trackplan.core.config import get_settings
from trackplan.domain.enums import UserRole
from trackplan.domain.exceptions import TrackplanException
from trackplan.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from trackplan.infrastructure.persistence.repositories import UserRepository
from trackplan.infrastructure.security import BcryptPasswordHasher


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a dashboard user")
    parser.add_argument("username")
    parser.add_argument("password", nargs="?")
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.ADMIN.value,
    )
    parser.add_argument("--name")
    parser.add_argument("--email")
    return parser.parse_args()


async def main() -> None:
    args = _parse_args()
    password = args.password or secrets.token_urlsafe(12)

    get_settings()
    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                service = UserService(UserRepository(session), BcryptPasswordHasher())
                user = await service.create_user(
                    UserCreate(
                        username=args.username,
                        password=password,
                        role=UserRole(args.role),
                        email=args.email,
                        name=args.name,
                    )
                )
    except TrackplanException as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()

    print(f"Created user: {user.id} ({user.username}, role={user.role.value})")
    if not args.password:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
