"""User model definitions."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from portal.database import Base

USER_ROLES = ("user", "admin")
_ROLE_CHECK = "role IN ({})".format(", ".join(f"'{role}'" for role in USER_ROLES))


class User(Base):
    """Represents a portal account."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(_ROLE_CHECK, name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")  # user/admin
