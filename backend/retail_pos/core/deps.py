"""Dependency injection: auth middleware and module access enforcement."""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from retail_pos.core.access import has_module_access
from retail_pos.core.security import decode_access_token
from retail_pos.schemas.auth import CurrentUser

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Decode JWT and return CurrentUser. Raises 401 on invalid/expired token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        user_id = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        return CurrentUser(
            id=UUID(user_id),
            email=payload.get("email", ""),
            role=payload.get("role"),
        )
    except (JWTError, ValueError):
        raise credentials_exception


def require_module(module: str):
    """Dependency factory: checks the user's role may open ``module``."""

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not has_module_access(user.role, module):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role}' has no access to module '{module}'",
            )
        return user

    return checker
