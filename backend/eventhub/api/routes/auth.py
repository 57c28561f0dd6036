"""
Authentication endpoints: register, login, guest login, profile, convert guest.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.db.session import get_db
from eventhub.api.errors import generic_failure
from eventhub.schemas.user import (
    UserCreate, UserLogin, GuestLogin, GuestConvert,
    AuthResponse, ProfileResponse, UserSummary,
)
from eventhub.services.auth_service import (
    register_user, authenticate_user, guest_login, get_profile, convert_guest,
    build_auth_response,
)
from eventhub.core.security import get_current_user_id

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, response: Response, db: AsyncSession = Depends(get_db)):
    """
    Register a new account. 201 for a new user; 200 when an existing guest
    account with the same email is promoted instead.
    """
    async with generic_failure(db, "Registration failed", action="register"):
        user, created = await register_user(db, user_data)
        await db.commit()
        if not created:
            response.status_code = status.HTTP_200_OK
        return build_auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_db)):
    async with generic_failure(db, "Login failed", action="login"):
        user = await authenticate_user(db, login_data)
        return build_auth_response(user)


@router.post("/guest-login", response_model=AuthResponse)
async def guest_login_endpoint(guest_data: GuestLogin, db: AsyncSession = Depends(get_db)):
    """Sign in with only an email. Reuses the guest account for that email if any."""
    async with generic_failure(db, "Guest login failed", action="guest_login", log_traceback=True):
        user = await guest_login(db, guest_data)
        await db.commit()
        return build_auth_response(user)


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    async with generic_failure(db, "Failed to get profile", action="profile"):
        user = await get_profile(db, user_id)
        return ProfileResponse(user=UserSummary.model_validate(user))


@router.post("/convert-guest", response_model=AuthResponse)
async def convert_guest_endpoint(
    convert_data: GuestConvert,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Give a guest account a name and password. Returns a fresh token."""
    async with generic_failure(
        db, "Failed to convert guest account", action="convert_guest", log_traceback=True
    ):
        user = await convert_guest(db, user_id, convert_data)
        await db.commit()
        return build_auth_response(user)
