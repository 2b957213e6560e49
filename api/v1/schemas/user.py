from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict, field_validator

from services.passwords import MAX_PASSWORD_BYTES


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    email: str | None = None
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes as UTF-8")
        return v


class UserOut(BaseModel):
    """Public view of a principal – never carries the hash."""
    id: int
    username: str
    email: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
