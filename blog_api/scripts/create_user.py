"""
Create a user (e.g. first admin) without going through the API. Run from project root:
  python -m blog_api.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m blog_api.scripts.create_user admin@example.com 'Your-secure-passw0rd' admin
"""
import argparse
import sys

from pydantic import ValidationError

from blog_api.core.database import SessionLocal
from blog_api.models import Role, User
from blog_api.schemas.auth import RegisterRequest
from blog_api.services.users import email_exists, generate_username


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a blog user (bypasses the admin allow-list).")
    parser.add_argument("email", help="Email address (max 50 chars)")
    parser.add_argument("password", help="Password (8-72 chars, mixed case, digit, symbol)")
    parser.add_argument("role", nargs="?", default="user", choices=[r.value for r in Role])
    args = parser.parse_args()

    try:
        payload = RegisterRequest(email=args.email, password=args.password, role=args.role)
    except ValidationError as e:
        for err in e.errors():
            print(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if email_exists(db, payload.email):
            print(f"User '{payload.email}' already exists.", file=sys.stderr)
            return 1
        user = User.create(
            username=generate_username(db),
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{user.username}' <{user.email}> with role '{user.role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
