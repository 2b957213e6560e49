from __future__ import annotations

from fastapi import APIRouter, Depends

from api.v1.deps import current_user
from api.v1.schemas import UserOut
from services.db import User

router = APIRouter()


# ───────────────────────── me ───────────────────────────────
@router.get("/me", response_model=UserOut)
async def fetch_me(user: User = Depends(current_user)) -> UserOut:
    return UserOut.model_validate(user, from_attributes=True)
