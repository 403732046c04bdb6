"""User endpoints: current profile for everyone, user management for admins."""

from fastapi import APIRouter, Response, status

from blog_api.api.deps import AdminUser, AnyRoleUser, DbSession, PageDep
from blog_api.schemas.user import UserRead, UserResponse, UsersListResponse, UserUpdate
from blog_api.services.users import delete_user, get_user, list_users, update_user

router = APIRouter()


@router.get("/current", response_model=UserResponse)
def get_current_user(current_user: AnyRoleUser) -> UserResponse:
    return UserResponse(user=UserRead.model_validate(current_user))


@router.put("/current", response_model=UserResponse)
def update_current_user(
    body: UserUpdate,
    current_user: AnyRoleUser,
    db: DbSession,
) -> UserResponse:
    """Partially update the current user's profile, credentials or social links."""
    user = update_user(db, current_user, body)
    return UserResponse(user=UserRead.model_validate(user))


@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
def delete_current_user(current_user: AnyRoleUser, db: DbSession) -> Response:
    """Delete the current account together with its blogs, comments, likes and sessions."""
    delete_user(db, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=UsersListResponse)
def get_all_users(_admin: AdminUser, db: DbSession, page: PageDep) -> UsersListResponse:
    """List users with pagination (admin only)."""
    users, total = list_users(db, page.limit, page.offset)
    return UsersListResponse(
        limit=page.limit,
        offset=page.offset,
        total=total,
        users=[UserRead.model_validate(u) for u in users],
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user_by_id(user_id: int, _admin: AdminUser, db: DbSession) -> UserResponse:
    return UserResponse(user=UserRead.model_validate(get_user(db, user_id)))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_by_id(user_id: int, _admin: AdminUser, db: DbSession) -> Response:
    delete_user(db, get_user(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
