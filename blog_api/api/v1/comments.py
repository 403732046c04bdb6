"""Comment endpoints."""

from fastapi import APIRouter, Response, status

from blog_api.api.deps import AnyRoleUser, DbSession
from blog_api.schemas.comment import (
    CommentCreate,
    CommentRead,
    CommentsCountResponse,
    CommentsListResponse,
)
from blog_api.services.comments import create_comment, delete_comment, list_comments

router = APIRouter()


@router.post(
    "/blog/{blog_id}",
    response_model=CommentsCountResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_comment(
    blog_id: int,
    body: CommentCreate,
    user: AnyRoleUser,
    db: DbSession,
) -> CommentsCountResponse:
    """Comment on a blog; returns the blog's updated comment count."""
    return CommentsCountResponse(comments_count=create_comment(db, blog_id, user, body.content))


@router.get("/blog/{blog_id}", response_model=CommentsListResponse)
def get_comments_by_blog(blog_id: int, user: AnyRoleUser, db: DbSession) -> CommentsListResponse:
    comments = list_comments(db, blog_id, user)
    return CommentsListResponse(comments=[CommentRead.model_validate(c) for c in comments])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment_route(comment_id: int, user: AnyRoleUser, db: DbSession) -> Response:
    """Delete a comment (its author or an admin)."""
    delete_comment(db, comment_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
