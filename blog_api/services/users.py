"""User profile operations: lookup, uniqueness checks, update, listing and deletion."""

import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.core.exceptions import NotFoundError, ValidationError
from blog_api.models import User
from blog_api.schemas.user import UserUpdate

logger = logging.getLogger(__name__)

USERNAME_PREFIX = "user-"
USERNAME_TAKEN_MESSAGE = "This username is already taken"
EMAIL_TAKEN_MESSAGE = "This email is already in use"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def email_exists(db: Session, email: str) -> bool:
    return (
        db.query(User.id).filter(User.email == normalize_email(email)).first() is not None
    )


def username_exists(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def generate_username(db: Session) -> str:
    """Return an unused username of the form user-<8 hex chars>."""
    while True:
        candidate = f"{USERNAME_PREFIX}{secrets.token_hex(4)}"
        if not username_exists(db, candidate):
            return candidate


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user(db: Session, user_id: int) -> User:
    """Return the user or raise NotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session, limit: int, offset: int) -> tuple[list[User], int]:
    """Return one page of users ordered by id, plus the total count."""
    total = db.query(User).count()
    users = db.query(User).order_by(User.id).offset(offset).limit(limit).all()
    return users, total


def update_user(db: Session, user: User, changes: UserUpdate) -> User:
    """
    Apply a partial profile update.

    A changed username or email must not belong to another user. A new password
    goes through User.set_password so only its hash is stored.
    """
    data = changes.model_dump(exclude_unset=True, exclude_none=True)

    username = data.pop("username", None)
    if username and username != user.username:
        if username_exists(db, username):
            raise ValidationError(USERNAME_TAKEN_MESSAGE)
        user.username = username

    email = data.pop("email", None)
    if email:
        email = normalize_email(email)
        if email != user.email:
            if email_exists(db, email):
                raise ValidationError(EMAIL_TAKEN_MESSAGE)
            user.email = email

    password = data.pop("password", None)
    if password:
        user.set_password(password)

    for field, value in data.items():
        if value:
            setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        # Another request claimed the username or email after the checks above.
        db.rollback()
        taken = EMAIL_TAKEN_MESSAGE if "email" in str(e.orig).lower() else USERNAME_TAKEN_MESSAGE
        raise ValidationError(taken) from e
    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id, "fields": sorted(changes.model_fields_set)})
    return user


def delete_user(db: Session, user: User) -> None:
    """
    Delete a user with their refresh tokens, blogs, comments and likes.

    Counters on blogs written by other users are decremented for the comments
    and likes that disappear with this account.
    """
    user_id = user.id
    for comment in user.comments:
        if comment.blog.author_id != user_id:
            comment.blog.comments_count = max(0, comment.blog.comments_count - 1)
    for like in user.likes:
        if like.blog.author_id != user_id:
            like.blog.likes_count = max(0, like.blog.likes_count - 1)
    blogs_deleted = len(user.blogs)
    db.delete(user)
    db.commit()
    logger.info(
        "User account deleted",
        extra={"user_id": user_id, "blogs_deleted": blogs_deleted},
    )
