"""Auth request/response schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from retail_pos.core.access import Role


# ── Sign in ────────────────────────────────────────
class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


# ── Sign up ────────────────────────────────────────
class UserProfile(BaseModel):
    username: str | None = Field(None, max_length=100)
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    profile: UserProfile = Field(default_factory=UserProfile)


# ── Session ────────────────────────────────────────
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str
    first_name: str
    last_name: str
    role: Role
    is_active: bool


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ── Current User ───────────────────────────────────
class CurrentUser(BaseModel):
    id: UUID
    email: str
    role: str | None = None
