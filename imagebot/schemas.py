from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
import datetime
from enum import Enum
from typing import Optional
import uuid


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class GenerationStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not GenerationStatus.PENDING


class CamelModel(BaseModel):
    """Serialized with camelCase keys over HTTP, populated by field name in code"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class GenerationRecord(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    requester_id: str
    prompt: str
    status: GenerationStatus = GenerationStatus.PENDING
    image_location: Optional[str] = None
    error_detail: Optional[str] = None
    created_at: datetime.datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime.datetime] = None

    @field_validator("created_at", "completed_at")
    @classmethod
    def ensure_utc(cls, v):
        # sqlite hands back naive datetimes
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=datetime.timezone.utc)
        return v


class GenerationUpdate(BaseModel):
    """Partial update; only explicitly set fields are merged"""
    status: Optional[GenerationStatus] = None
    image_location: Optional[str] = None
    error_detail: Optional[str] = None
    completed_at: Optional[datetime.datetime] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class BotStats(BaseModel):
    totalGenerations: int = 0
    successfulGenerations: int = 0
    failedGenerations: int = 0
    uniqueUsers: int = 0
    averageGenerationTimeSeconds: float = 0


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str


class UserAccount(UserCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    class Config:
        from_attributes = True


# HTTP responses
class ServiceStatusResponse(BaseModel):
    status: str
    message: str
    timestamp: str
    team: str


class BotInfo(BaseModel):
    id: int
    username: Optional[str] = None
    first_name: str


class BotHealthResponse(BaseModel):
    status: str
    botInfo: BotInfo
    timestamp: str
