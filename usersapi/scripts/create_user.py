"""
Create a user record from the command line (e.g. to seed a fresh table). Run from project root:
  python -m usersapi.scripts.create_user USERNAME PASSWORD [--firstname F] [--lastname L] [--status S]
Example:
  python -m usersapi.scripts.create_user admin your-secure-password --status active
"""
import argparse
import asyncio
import logging
import sys

from usersapi.core.config import get_settings
from usersapi.core.database import create_engine_from_settings, create_sessionmaker
from usersapi.core.security import HashingFailure
from usersapi.services.user_store import StoreFailure, UserStore
from usersapi.services.users import UserService, ValidationFailure

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user record with a hashed password.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Plain-text password; stored only as a bcrypt hash")
    parser.add_argument("--firstname", default=None)
    parser.add_argument("--lastname", default=None)
    parser.add_argument("--fullname", default=None, help="Defaults to 'FIRSTNAME LASTNAME' when both are given")
    parser.add_argument("--status", default="active")
    return parser


async def create(args: argparse.Namespace) -> int:
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    session_factory = create_sessionmaker(engine)

    fullname = args.fullname
    if fullname is None and args.firstname and args.lastname:
        fullname = f"{args.firstname} {args.lastname}"
    fields = {
        "username": args.username,
        "firstname": args.firstname,
        "lastname": args.lastname,
        "fullname": fullname,
        "status": args.status,
    }
    try:
        async with session_factory() as db:
            service = UserService(UserStore(db), bcrypt_rounds=settings.BCRYPT_ROUNDS)
            user = await service.create(fields, args.password)
        print(f"Created user '{user.username}' with id {user.id}.")
        return 0
    except ValidationFailure as e:
        print(e.message, file=sys.stderr)
        return 1
    except (StoreFailure, HashingFailure) as e:
        logger.exception("User creation failed: %s", e.message)
        return 1
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    args.username = username
    return asyncio.run(create(args))


if __name__ == "__main__":
    sys.exit(main())
