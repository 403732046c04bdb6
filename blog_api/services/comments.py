"""Comments on blog posts; keeps Blog.comments_count in step."""

import logging

import nh3
from sqlalchemy.orm import Session

from blog_api.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from blog_api.models import Blog, Comment, User
from blog_api.services.blogs import DENIED_MESSAGE, get_visible_blog

logger = logging.getLogger(__name__)


def sanitize_comment(content: str) -> str:
    """Keep safe inline markup; drop scripts, event-handler attributes and unknown tags."""
    return nh3.clean(content).strip()


def create_comment(db: Session, blog_id: int, author: User, content: str) -> int:
    """Add a comment and return the blog's updated comment count."""
    blog = get_visible_blog(db, blog_id, author)
    clean = sanitize_comment(content)
    if not clean:
        raise ValidationError("Content is required")
    comment = Comment(blog_id=blog.id, user_id=author.id, content=clean)
    db.add(comment)
    blog.comments_count = Blog.comments_count + 1
    db.commit()
    db.refresh(blog)
    logger.info(
        "New comment created",
        extra={"comment_id": comment.id, "blog_id": blog.id, "user_id": author.id},
    )
    return blog.comments_count


def list_comments(db: Session, blog_id: int, viewer: User) -> list[Comment]:
    """Comments of one blog, newest first."""
    blog = get_visible_blog(db, blog_id, viewer)
    return (
        db.query(Comment)
        .filter(Comment.blog_id == blog.id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def delete_comment(db: Session, comment_id: int, user: User) -> None:
    """Delete a comment; allowed for its author and for admins."""
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.user_id != user.id and not user.is_admin:
        raise AuthorizationError(DENIED_MESSAGE)
    blog = comment.blog
    db.delete(comment)
    blog.comments_count = Blog.comments_count - 1
    db.commit()
    logger.info(
        "Comment deleted",
        extra={"comment_id": comment_id, "blog_id": blog.id, "user_id": user.id},
    )
