"""
Create a user directly in the store (e.g. the first admin). Run from project root:
  python -m gatehouse.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m gatehouse.scripts.create_user admin admin@gatehouse.io your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from gatehouse.core.database import SessionLocal
from gatehouse.models import Role
from gatehouse.schemas.user import UserCreate
from gatehouse.services.user_store import DuplicateEmailError, create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Gatehouse user, bypassing the API.")
    parser.add_argument("username", help="Username (3-255 chars)")
    parser.add_argument("email", help="Email address, used to log in")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    try:
        body = UserCreate(
            username=args.username.strip(), email=args.email, password=args.password
        )
    except ValidationError as e:
        for error in e.errors():
            field = error["loc"][-1] if error["loc"] else "input"
            print(f"{error['msg']}: {field}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(
            db,
            username=body.username,
            email=str(body.email),
            password=body.password,
            role=Role(args.role),
        )
    except DuplicateEmailError as e:
        print(f"{e.message}: {e.email}", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user '%s' (%s) with role '%s'.", user.username, user.id, user.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
