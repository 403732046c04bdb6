"""Refresh token store: server-side record of every refresh token still honoured."""

from datetime import datetime

from sqlalchemy.orm import Session

from blog_api.models import RefreshToken


class RefreshTokenStore:
    """
    Thin repository over the refresh_tokens table.

    Methods only stage changes on the session; the caller commits, so issuing a
    token pair and recording the refresh token share one transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def record(self, token: str, user_id: int, expires_at: datetime) -> None:
        self._session.add(RefreshToken(token=token, user_id=user_id, expires_at=expires_at))
        self._session.flush()

    def exists(self, token: str) -> bool:
        return (
            self._session.query(RefreshToken.id)
            .filter(RefreshToken.token == token)
            .first()
            is not None
        )

    def owner_of(self, token: str) -> int | None:
        """Return the user id that owns token, or None when it is not recorded."""
        row = (
            self._session.query(RefreshToken.user_id)
            .filter(RefreshToken.token == token)
            .first()
        )
        return row[0] if row else None

    def remove(self, token: str, user_id: int | None = None) -> int:
        """
        Delete the record for token. Idempotent: an unknown token removes nothing.

        When user_id is given only a record owned by that user is removed.
        """
        query = self._session.query(RefreshToken).filter(RefreshToken.token == token)
        if user_id is not None:
            query = query.filter(RefreshToken.user_id == user_id)
        return query.delete(synchronize_session=False)

    def remove_all_for_user(self, user_id: int) -> int:
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def purge_expired(self, now: datetime) -> int:
        """Delete records whose token signature has already expired."""
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.expires_at < now)
            .delete(synchronize_session=False)
        )
