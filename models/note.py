"""Note models: free-text notes attached to a trip."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


NOTE_MAX_LENGTH = 10_000


class NoteCreate(BaseModel):
    """Schema for creating or replacing a note's content."""

    content: str = Field(..., max_length=NOTE_MAX_LENGTH, description="Note text")

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("can't be blank")
        return v


NoteUpdate = NoteCreate


class NoteInDB(BaseModel):
    """Schema for a note stored in the database."""

    id: str
    trip_id: str
    content: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def from_document(cls, doc: dict) -> "NoteInDB":
        return cls(
            id=str(doc["_id"]),
            trip_id=str(doc["trip_id"]),
            content=doc["content"],
            created_at=doc.get("created_at", datetime.utcnow()),
            updated_at=doc.get("updated_at", datetime.utcnow()),
        )
