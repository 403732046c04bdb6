"""ORM model for application users (auth, RBAC and public profile)."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from blog_api.core.security import hash_password
from blog_api.models.base import Base

SOCIAL_LINK_FIELDS = (
    "website",
    "twitter",
    "instagram",
    "facebook",
    "youtube",
    "linkedin",
    "github",
)


class Role(str, enum.Enum):
    """Closed set of roles; authorization checks compare against these members only."""

    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash always holds a bcrypt hash: it is only ever set through
    User.create() or User.set_password().
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(20), nullable=False, unique=True, index=True)
    email = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=16,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.USER,
    )
    first_name = Column(String(20), nullable=True)
    last_name = Column(String(20), nullable=True)
    website = Column(String(100), nullable=True)
    twitter = Column(String(100), nullable=True)
    instagram = Column(String(100), nullable=True)
    facebook = Column(String(100), nullable=True)
    youtube = Column(String(100), nullable=True)
    linkedin = Column(String(100), nullable=True)
    github = Column(String(100), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan"
    )
    blogs = relationship("Blog", back_populates="author", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")

    @classmethod
    def create(
        cls,
        *,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        **profile: str | None,
    ) -> "User":
        """Build a new user; the plain password is hashed here and never kept."""
        return cls(
            username=username,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            role=role,
            **profile,
        )

    def set_password(self, plain_password: str) -> None:
        """Replace the stored credential with a fresh hash of plain_password."""
        self.password_hash = hash_password(plain_password)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def social_links(self) -> dict[str, str]:
        """Non-empty social profile links keyed by network."""
        return {
            name: getattr(self, name)
            for name in SOCIAL_LINK_FIELDS
            if getattr(self, name)
        }
