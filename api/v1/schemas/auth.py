from __future__ import annotations

from pydantic import BaseModel


class LoginIn(BaseModel):
    username: str
    password: str


class LoginOut(BaseModel):
    token: str
    expires_in: int             # milliseconds, same unit as JWT_EXPIRATION_TIME
