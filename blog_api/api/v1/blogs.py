"""Blog endpoints. Admins author posts; every authenticated user can read published ones."""

from fastapi import APIRouter, Response, status

from blog_api.api.deps import AdminUser, AnyRoleUser, DbSession, Page, PageDep
from blog_api.models import Blog
from blog_api.schemas.blog import (
    BlogCreate,
    BlogRead,
    BlogResponse,
    BlogsListResponse,
    BlogUpdate,
)
from blog_api.services.blogs import (
    create_blog,
    delete_blog,
    get_blog,
    get_blog_by_slug,
    list_blogs,
    update_blog,
)
from blog_api.services.users import get_user

router = APIRouter()


def _page_response(blogs: list[Blog], total: int, page: Page) -> BlogsListResponse:
    return BlogsListResponse(
        limit=page.limit,
        offset=page.offset,
        total=total,
        blogs=[BlogRead.model_validate(b) for b in blogs],
    )


@router.post("", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
def post_blog(body: BlogCreate, author: AdminUser, db: DbSession) -> BlogResponse:
    blog = create_blog(db, author, body)
    return BlogResponse(blog=BlogRead.model_validate(blog))


@router.get("", response_model=BlogsListResponse)
def get_all_blogs(viewer: AnyRoleUser, db: DbSession, page: PageDep) -> BlogsListResponse:
    """List blogs newest first. Users only see published posts; admins also see drafts."""
    blogs, total = list_blogs(db, viewer, page.limit, page.offset)
    return _page_response(blogs, total, page)


@router.get("/user/{user_id}", response_model=BlogsListResponse)
def get_blogs_by_user(
    user_id: int,
    viewer: AnyRoleUser,
    db: DbSession,
    page: PageDep,
) -> BlogsListResponse:
    author = get_user(db, user_id)
    blogs, total = list_blogs(db, viewer, page.limit, page.offset, author_id=author.id)
    return _page_response(blogs, total, page)


@router.get("/{slug}", response_model=BlogResponse)
def get_blog_by_slug_route(slug: str, viewer: AnyRoleUser, db: DbSession) -> BlogResponse:
    return BlogResponse(blog=BlogRead.model_validate(get_blog_by_slug(db, slug, viewer)))


@router.put("/{blog_id}", response_model=BlogResponse)
def put_blog(
    blog_id: int,
    body: BlogUpdate,
    editor: AdminUser,
    db: DbSession,
) -> BlogResponse:
    blog = update_blog(db, get_blog(db, blog_id), editor, body)
    return BlogResponse(blog=BlogRead.model_validate(blog))


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blog_route(blog_id: int, editor: AdminUser, db: DbSession) -> Response:
    delete_blog(db, get_blog(db, blog_id), editor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
