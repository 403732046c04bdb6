"""Response schema for like/unlike."""

from blog_api.schemas.base import CamelModel


class LikesCountResponse(CamelModel):
    likes_count: int
