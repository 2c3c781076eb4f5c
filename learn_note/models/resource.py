from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Boolean, Enum, UniqueConstraint
from sqlalchemy.sql import func
from learn_note.database import Base

RESOURCE_TYPES = ("youtube", "other")


class Resource(Base):
    __tablename__ = "resources"
    __table_args__ = (
        # titles are unique within a topic, not across the user's whole library
        UniqueConstraint("user_id", "parent", "title", name="uq_resources_user_parent_title"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    parent = Column(Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    uri = Column(Text, nullable=False)  # bare video id for youtube resources
    type = Column(Enum(*RESOURCE_TYPES, name="resource_type"), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    last_opened = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
