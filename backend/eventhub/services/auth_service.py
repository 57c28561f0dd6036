"""
Authentication service: registration, login, guest accounts.

Guest accounts are regular rows with ``is_guest=True`` and a throwaway
password. Registering with a guest's email promotes that row in place.
"""

import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from eventhub.models.user import User
from eventhub.schemas.user import (
    UserCreate, UserLogin, GuestLogin, GuestConvert,
    AuthResponse, UserSummary, normalize_email,
)
from eventhub.core.config import get_settings
from eventhub.core.security import hash_password, verify_password, issue_token_for
from eventhub.core.metrics import record_auth_attempt
from eventhub.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


def build_auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserSummary.model_validate(user), token=issue_token_for(user.id))


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, user_data: UserCreate) -> tuple[User, bool]:
    """
    Register a user. Returns ``(user, created)``; ``created`` is False when an
    existing guest account was promoted instead of a new row being inserted.
    Raises 400 if the email belongs to a regular account.
    """
    email = normalize_email(user_data.email)
    existing = await get_user_by_email(db, email)

    if existing:
        if not existing.is_guest:
            logger.warning("registration_failed", reason="email_exists", email=email)
            record_auth_attempt("register", "rejected")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered",
            )

        existing.name = user_data.name
        existing.hashed_password = hash_password(user_data.password)
        existing.is_guest = False
        await db.flush()

        logger.info("guest_promoted", user_id=existing.id, email=email)
        record_auth_attempt("register", "success")
        return existing, False

    user = User(
        name=user_data.name,
        email=email,
        hashed_password=hash_password(user_data.password),
        is_guest=False,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id, email=email)
    record_auth_attempt("register", "success")
    return user, True


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> User:
    """
    Check credentials. Unknown email and wrong password raise the same 401.
    The email is looked up exactly as sent.
    """
    user = await get_user_by_email(db, login_data.email)

    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=login_data.email)
        record_auth_attempt("login", "rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info("user_logged_in", user_id=user.id)
    record_auth_attempt("login", "success")
    return user


async def guest_login(db: AsyncSession, guest_data: GuestLogin) -> User:
    """Return the guest account for this email, creating it on first use."""
    email = normalize_email(guest_data.email)
    existing = await get_user_by_email(db, email)

    if existing:
        if not existing.is_guest:
            record_auth_attempt("guest_login", "rejected")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This email is registered with a regular account. Please login instead.",
            )
        logger.info("guest_logged_in", user_id=existing.id)
        record_auth_attempt("guest_login", "success")
        return existing

    user = User(
        name=settings.GUEST_DISPLAY_NAME,
        email=email,
        hashed_password=hash_password(secrets.token_urlsafe(12)),
        is_guest=True,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("guest_created", user_id=user.id, email=email)
    record_auth_attempt("guest_login", "success")
    return user


async def get_profile(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


async def convert_guest(db: AsyncSession, user_id: int, convert_data: GuestConvert) -> User:
    """Turn a guest account into a regular one. Raises 400 for non-guests."""
    user = await db.get(User, user_id)

    if not user or not user.is_guest:
        record_auth_attempt("convert_guest", "rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only guest accounts can be converted",
        )

    user.name = convert_data.name
    user.hashed_password = hash_password(convert_data.password)
    user.is_guest = False
    await db.flush()

    logger.info("guest_converted", user_id=user.id)
    record_auth_attempt("convert_guest", "success")
    return user
