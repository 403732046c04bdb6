"""Like endpoints. The liking user is always the authenticated caller."""

from fastapi import APIRouter, Response, status

from blog_api.api.deps import AnyRoleUser, DbSession
from blog_api.schemas.like import LikesCountResponse
from blog_api.services.likes import like_blog, unlike_blog

router = APIRouter()


@router.post("/blog/{blog_id}", response_model=LikesCountResponse)
def post_like(blog_id: int, user: AnyRoleUser, db: DbSession) -> LikesCountResponse:
    return LikesCountResponse(likes_count=like_blog(db, blog_id, user))


@router.delete("/blog/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_like(blog_id: int, user: AnyRoleUser, db: DbSession) -> Response:
    unlike_blog(db, blog_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
