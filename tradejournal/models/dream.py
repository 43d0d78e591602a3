"""DreamRecord data model."""

from datetime import date as date_type

from pydantic import BaseModel, Field, field_validator


class DreamRecord(BaseModel):
    """A free-text goal or motivation note."""

    id: int = Field(..., gt=0, description="Unique record ID")
    date: date_type = Field(..., description="Date the dream was written")
    content: str = Field(..., min_length=1, description="Dream text")

    model_config = {"frozen": True}

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value
