"""Blog post operations: authoring, visibility rules and pagination."""

import logging
import re
import secrets
from datetime import UTC, datetime

from sqlalchemy.orm import Session, joinedload

from blog_api.core.exceptions import AuthorizationError, NotFoundError
from blog_api.models import Blog, BlogStatus, User
from blog_api.schemas.blog import BlogCreate, BlogUpdate

logger = logging.getLogger(__name__)

SLUG_BASE_MAX_LENGTH = 200
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

DENIED_MESSAGE = "Access denied, insufficient permissions"


def slugify_title(title: str) -> str:
    """Lower-case, hyphen-separated title plus a random suffix, e.g. my-post-3fa2c1."""
    base = _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")[:SLUG_BASE_MAX_LENGTH]
    return f"{base or 'blog'}-{secrets.token_hex(3)}"


def _unique_slug(db: Session, title: str) -> str:
    while True:
        slug = slugify_title(title)
        if db.query(Blog.id).filter(Blog.slug == slug).first() is None:
            return slug


def create_blog(db: Session, author: User, data: BlogCreate) -> Blog:
    blog = Blog(
        title=data.title,
        slug=_unique_slug(db, data.title),
        content=data.content,
        status=data.status,
        author_id=author.id,
        published_at=datetime.now(UTC) if data.status is BlogStatus.PUBLISHED else None,
    )
    db.add(blog)
    db.commit()
    db.refresh(blog)
    logger.info("New blog created", extra={"blog_id": blog.id, "author_id": author.id})
    return blog


def list_blogs(
    db: Session,
    viewer: User,
    limit: int,
    offset: int,
    author_id: int | None = None,
) -> tuple[list[Blog], int]:
    """Return one page of blogs, newest first. Non-admins only see published posts."""
    query = db.query(Blog)
    if author_id is not None:
        query = query.filter(Blog.author_id == author_id)
    if not viewer.is_admin:
        query = query.filter(Blog.status == BlogStatus.PUBLISHED)
    total = query.count()
    blogs = (
        query.options(joinedload(Blog.author))
        .order_by(Blog.created_at.desc(), Blog.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return blogs, total


def get_blog(db: Session, blog_id: int) -> Blog:
    """Return the blog or raise NotFoundError."""
    blog = db.get(Blog, blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")
    return blog


def _require_visible(blog: Blog, viewer: User) -> Blog:
    if blog.status is BlogStatus.DRAFT and not viewer.is_admin:
        raise AuthorizationError(DENIED_MESSAGE)
    return blog


def get_visible_blog(db: Session, blog_id: int, viewer: User) -> Blog:
    """Return the blog if viewer may see it. Drafts are admin-only (403 for users)."""
    return _require_visible(get_blog(db, blog_id), viewer)


def get_blog_by_slug(db: Session, slug: str, viewer: User) -> Blog:
    blog = db.query(Blog).filter(Blog.slug == slug).first()
    if blog is None:
        raise NotFoundError("Blog not found")
    return _require_visible(blog, viewer)


def _require_author(blog: Blog, user: User) -> None:
    if blog.author_id != user.id:
        raise AuthorizationError(DENIED_MESSAGE)


def update_blog(db: Session, blog: Blog, editor: User, changes: BlogUpdate) -> Blog:
    """Apply a partial update; only the author may edit. First publish stamps published_at."""
    _require_author(blog, editor)
    data = changes.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in data.items():
        setattr(blog, field, value)
    if blog.status is BlogStatus.PUBLISHED and blog.published_at is None:
        blog.published_at = datetime.now(UTC)
    db.commit()
    db.refresh(blog)
    logger.info("Blog updated", extra={"blog_id": blog.id, "fields": sorted(data)})
    return blog


def delete_blog(db: Session, blog: Blog, editor: User) -> None:
    _require_author(blog, editor)
    blog_id = blog.id
    db.delete(blog)
    db.commit()
    logger.info("Blog deleted", extra={"blog_id": blog_id, "author_id": editor.id})
