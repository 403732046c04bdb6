"""Likes on blog posts; keeps Blog.likes_count in step."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.core.exceptions import NotFoundError, ValidationError
from blog_api.models import Blog, Like, User
from blog_api.services.blogs import get_visible_blog

logger = logging.getLogger(__name__)

ALREADY_LIKED_MESSAGE = "You already liked this blog"


def _find_like(db: Session, blog_id: int, user_id: int) -> Like | None:
    return (
        db.query(Like)
        .filter(Like.blog_id == blog_id, Like.user_id == user_id)
        .first()
    )


def like_blog(db: Session, blog_id: int, user: User) -> int:
    """Record a like from user and return the blog's updated like count."""
    blog = get_visible_blog(db, blog_id, user)
    if _find_like(db, blog.id, user.id) is not None:
        raise ValidationError(ALREADY_LIKED_MESSAGE)
    db.add(Like(blog_id=blog.id, user_id=user.id))
    blog.likes_count = Blog.likes_count + 1
    try:
        db.commit()
    except IntegrityError as e:
        # Concurrent like from the same user hit the unique constraint.
        db.rollback()
        raise ValidationError(ALREADY_LIKED_MESSAGE) from e
    db.refresh(blog)
    logger.info("Blog liked", extra={"blog_id": blog.id, "user_id": user.id})
    return blog.likes_count


def unlike_blog(db: Session, blog_id: int, user: User) -> None:
    blog = get_visible_blog(db, blog_id, user)
    like = _find_like(db, blog.id, user.id)
    if like is None:
        raise NotFoundError("Like not found")
    db.delete(like)
    blog.likes_count = Blog.likes_count - 1
    db.commit()
    logger.info("Blog unliked", extra={"blog_id": blog.id, "user_id": user.id})
