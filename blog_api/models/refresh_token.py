"""ORM model for issued refresh tokens (server-side revocation list)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from blog_api.models.base import Base


class RefreshToken(Base):
    """
    One row per refresh token handed to a client.

    A refresh is only honoured while its row exists, so deleting the row revokes
    the token even though its signature stays valid. expires_at mirrors the
    token's exp claim and is only used to purge stale rows.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(1024), nullable=False, unique=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    user = relationship("User", back_populates="refresh_tokens")
