"""Authentication endpoints: sign in, sign up, sign out, current profile."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.deps import get_current_user
from retail_pos.core.errors import ServiceUnavailableError
from retail_pos.db.base import get_db
from retail_pos.models.user import User
from retail_pos.schemas.auth import (
    CurrentUser,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from retail_pos.services.auth_bridge import AuthBridge, CurrentUserChannel, get_user_channel

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    body: SignInRequest,
    db: AsyncSession = Depends(get_db),
    channel: CurrentUserChannel = Depends(get_user_channel),
):
    """Authenticate via email + password, return a session with a JWT."""
    return await AuthBridge(db, channel).sign_in(body.email, body.password)


@router.post("/sign-up", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    body: SignUpRequest,
    db: AsyncSession = Depends(get_db),
    channel: CurrentUserChannel = Depends(get_user_channel),
):
    """Self-service registration; new accounts start as cashiers."""
    return await AuthBridge(db, channel).sign_up(body.email, body.password, body.profile)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    channel: CurrentUserChannel = Depends(get_user_channel),
):
    """Tokens are stateless; clients drop theirs after this call."""
    await AuthBridge(db, channel).sign_out()


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return full profile of the current authenticated user."""
    try:
        result = await db.execute(select(User).where(User.id == current_user.id))
        user = result.scalar_one_or_none()
    except SQLAlchemyError:
        raise ServiceUnavailableError("Unable to load your profile right now. Please try again.")

    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return UserResponse.model_validate(user)
