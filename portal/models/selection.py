"""Dashboard selection model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from portal.database import Base


class Selection(Base):
    """Records that a user placed a tool on their dashboard."""
    __tablename__ = "user_tool_selections"
    __table_args__ = (
        UniqueConstraint("user_id", "tool_id", name="uq_selection_user_tool"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tool_id = Column(Integer, ForeignKey("tools.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
