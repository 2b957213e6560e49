from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import unauthorized
from api.v1.schemas import LoginIn, LoginOut, UserCreate, UserOut
from core.log import get_logger
from services.auth import TokenService, token_service
from services.db import User, get_session, get_user_by_username
from services.passwords import hash_password, verify_password

router = APIRouter()
log = get_logger("api.auth")


# ───────────────────────── signup ──────────────────────────
@router.post(
    "/signup",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: UserCreate,
    db: AsyncSession = Depends(get_session),
) -> UserOut:
    if await get_user_by_username(db, body.username):
        raise HTTPException(status_code=409, detail="User already exists")

    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup for the same username
        await db.rollback()
        raise HTTPException(status_code=409, detail="User already exists")
    await db.refresh(user)
    log.info("user signed up", user_id=user.id, username=user.username)
    return UserOut.model_validate(user, from_attributes=True)


# ───────────────────────── login ───────────────────────────
@router.post("/login", response_model=LoginOut)
async def login(
    body: LoginIn,
    db: AsyncSession = Depends(get_session),
    tokens: TokenService = Depends(token_service),
) -> LoginOut:
    user = await get_user_by_username(db, body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        log.info("login failed", username=body.username)
        raise unauthorized("Bad username or password")

    token = tokens.issue(user.username, claims={"uid": user.id})
    log.info("login succeeded", user_id=user.id)
    return LoginOut(token=token, expires_in=tokens.expires_in)
