from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.sql import func
from learn_note.database import Base


class Topic(Base):
    __tablename__ = "topics"
    __table_args__ = (
        UniqueConstraint("user_id", "title", name="uq_topics_user_title"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    # deleting a folder detaches its topics instead of removing them
    parent = Column(Integer, ForeignKey("folders.id", ondelete="SET NULL"), nullable=True)
    notebook = Column(JSON, nullable=True)  # delta document: {"ops": [...]}
    resource_order = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
