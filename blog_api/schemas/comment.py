"""Request/response schemas for comments."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from blog_api.schemas.base import CamelModel

COMMENT_MAX_LENGTH = 1000


class CommentCreate(BaseModel):
    content: str = Field(..., max_length=COMMENT_MAX_LENGTH, description="Comment text")

    @field_validator("content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v


class CommentRead(CamelModel):
    id: int
    blog_id: int
    user_id: int
    content: str
    created_at: datetime | None = None


class CommentsListResponse(CamelModel):
    comments: list[CommentRead]


class CommentsCountResponse(CamelModel):
    comments_count: int
