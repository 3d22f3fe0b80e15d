"""Tool model definitions."""

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String, Text
from portal.core.categories import CATEGORY_KEYS
from portal.database import Base

_CATEGORY_CHECK = "category IN ({})".format(", ".join(f"'{key}'" for key in CATEGORY_KEYS))


class Tool(Base):
    """Represents an external link shown in the catalog."""
    __tablename__ = "tools"
    __table_args__ = (
        CheckConstraint(_CATEGORY_CHECK, name="ck_tools_category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    url = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
