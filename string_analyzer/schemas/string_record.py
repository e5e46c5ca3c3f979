from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Any, Dict, List
from datetime import datetime, timezone


class StringCreate(BaseModel):
    value: StrictStr = Field(..., description="String to analyze")

    @field_validator("value")
    @classmethod
    def strip_and_require_content(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("'value' must not be empty")
        return stripped


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    class Config:
        from_attributes = True

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery
