from sqlalchemy import Column, Integer, String, Text, JSON
from learn_note.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    password = Column(Text, nullable=False)  # bcrypt hash, never serialized
    topic_order = Column(JSON, nullable=False, default=list)
