"""Sign-in/sign-up/sign-out over the users table, plus a current-user channel.

``CurrentUserChannel`` replaces implicit framework lifecycle hooks: anything
that cares about the signed-in user subscribes, and must call
``Subscription.unsubscribe()`` when it no longer wants updates.
"""

import enum
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.access import DEFAULT_ROLE
from retail_pos.core.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    ServiceUnavailableError,
)
from retail_pos.core.security import create_access_token, hash_password, verify_password
from retail_pos.models.user import User
from retail_pos.schemas.auth import SessionResponse, UserProfile, UserResponse

logger = logging.getLogger(__name__)

EMAIL_NOT_CONFIRMED = (
    "Email not confirmed. Please check your email and click the confirmation link before logging in."
)


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthCallback = Callable[[AuthEvent, Any], None]


class Subscription:
    def __init__(self, channel: "CurrentUserChannel", callback: AuthCallback):
        self._channel = channel
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving events. Calling it again is a no-op."""
        if self.active:
            self.active = False
            self._channel._remove(self)


class CurrentUserChannel:
    """Holds the signed-in user (``None`` when signed out) and fans out changes."""

    def __init__(self) -> None:
        self._user: Any = None
        self._subscriptions: list[Subscription] = []

    @property
    def current(self) -> Any:
        return self._user

    def subscribe(self, callback: AuthCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, event: AuthEvent, user: Any) -> None:
        self._user = user
        for subscription in list(self._subscriptions):
            try:
                subscription._callback(event, user)
            except Exception:
                logger.exception("Auth subscriber failed on %s", event.value)

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions.remove(subscription)

    def __len__(self) -> int:
        return len(self._subscriptions)


class AuthBridge:
    def __init__(self, db: AsyncSession, channel: CurrentUserChannel | None = None):
        self.db = db
        self.channel = channel or CurrentUserChannel()

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    def _session_for(self, user: User) -> SessionResponse:
        token = create_access_token(user_id=user.id, email=user.email, role=user.role.value)
        return SessionResponse(access_token=token, user=UserResponse.model_validate(user))

    async def sign_in(self, email: str, password: str) -> SessionResponse:
        try:
            user = await self._find_by_email(email)
        except SQLAlchemyError:
            logger.exception("Sign in lookup failed for %s", email)
            raise ServiceUnavailableError("Unable to sign in right now. Please try again.")

        if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")
        if not user.email_confirmed:
            raise AuthenticationError(EMAIL_NOT_CONFIRMED)
        if not user.is_active:
            raise AccessDeniedError("Account is deactivated")

        session = self._session_for(user)
        self.channel.publish(AuthEvent.SIGNED_IN, user)
        return session

    async def sign_up(self, email: str, password: str, profile: UserProfile | None = None) -> SessionResponse:
        profile = profile or UserProfile()
        try:
            if await self._find_by_email(email):
                raise ConflictError("Email already registered")

            user = User(
                email=email,
                username=profile.username or email.split("@")[0],
                hashed_password=hash_password(password),
                first_name=profile.first_name,
                last_name=profile.last_name,
                role=DEFAULT_ROLE,
                is_active=True,
                email_confirmed=True,
            )
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError:
            logger.exception("Sign up failed for %s", email)
            await self.db.rollback()
            raise ServiceUnavailableError("Unable to create the account right now. Please try again.")

        logger.info("New user signed up: %s", email)
        session = self._session_for(user)
        self.channel.publish(AuthEvent.SIGNED_IN, user)
        return session

    async def sign_out(self) -> None:
        self.channel.publish(AuthEvent.SIGNED_OUT, None)

    def get_current_user(self) -> Any:
        return self.channel.current

    async def resolve_role(self, user_id) -> str | None:
        """Role from the users table.

        Returns None when the lookup failed, which callers must keep distinct
        from a resolved role with no module access. A token whose user row is
        gone is rejected rather than recreated.
        """
        try:
            result = await self.db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("Error fetching user role for %s", user_id)
            await self.db.rollback()
            return None

        if user is None:
            logger.warning("Token refers to missing user %s", user_id)
            raise AuthenticationError("Account no longer exists")
        return user.role.value


_channel: CurrentUserChannel | None = None


def get_user_channel() -> CurrentUserChannel:
    """Return the process-wide channel every ``AuthBridge`` publishes to."""
    global _channel
    if _channel is None:
        _channel = CurrentUserChannel()
    return _channel
