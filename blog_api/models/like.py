"""ORM model for likes: at most one per (blog, user)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from blog_api.models.base import Base


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("blog_id", "user_id", name="uq_likes_blog_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    blog_id = Column(
        Integer,
        ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
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

    blog = relationship("Blog", back_populates="likes")
    user = relationship("User", back_populates="likes")
