from sqlalchemy import Column, Integer, String, DateTime, Text
from .database import Base
import datetime
import uuid

def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)

class ImageGeneration(Base):
    __tablename__ = "image_generations"

    # seq is the insertion order; id is the public identifier
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False, default=lambda: str(uuid.uuid4()))
    # Attribute names follow GenerationRecord, column names the original table
    requester_id = Column("telegram_user_id", Text, nullable=False, index=True)
    prompt = Column(Text, nullable=False)
    image_location = Column("image_url", Text, nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending, completed, failed
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    error_detail = Column("error_message", Text, nullable=True)
