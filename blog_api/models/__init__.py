"""SQLAlchemy ORM models."""

from blog_api.models.base import Base
from blog_api.models.blog import Blog, BlogStatus
from blog_api.models.comment import Comment
from blog_api.models.like import Like
from blog_api.models.refresh_token import RefreshToken
from blog_api.models.user import Role, User

__all__ = ["Base", "Blog", "BlogStatus", "Comment", "Like", "RefreshToken", "Role", "User"]
