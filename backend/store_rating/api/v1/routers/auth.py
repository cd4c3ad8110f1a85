from fastapi import APIRouter, Depends, status

from store_rating.api.v1.deps import get_current_user
from store_rating.api.v1.serializers import user_to_dict
from store_rating.core.security import create_access_token
from store_rating.models.user import User
from store_rating.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateIn,
    RegisterIn,
    UpdatePasswordIn,
    UserEnvelope,
    VerifyOut,
)
from store_rating.schemas.common import MessageOut
from store_rating import services

router = APIRouter(prefix="/auth", tags=["auth"])

def _issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role.value)

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn):
    """
    Register a new account.

    Creates a USER account (any role in the body is ignored) and returns a
    bearer token so the client is signed in right away.

    Returns:
        AuthResponse: message, token and the created user

    Raises:
        ValidationFailed (400): Field constraints or password policy violated
        Conflict (400): Email already registered (EMAIL_EXISTS)
    """
    user = await services.register(body.name, body.email, body.password, body.address)
    return {"message": "User registered successfully", "token": _issue_token(user), "user": user_to_dict(user)}

@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest):
    """
    Authenticate user and create access token.

    Raises:
        InvalidCredentials (401): Unknown email or wrong password (same response for both)
    """
    user = await services.authenticate(payload.email, payload.password)
    return {"message": "Login successful", "token": _issue_token(user), "user": user_to_dict(user)}

@router.put("/update-password", response_model=MessageOut)
async def update_password(body: UpdatePasswordIn, user: User = Depends(get_current_user)):
    """
    Change password for the currently authenticated user.

    Requires the current password; the new one must satisfy the password policy.

    Raises:
        InvalidCredentials (400): Current password is incorrect
        ValidationFailed (400): New password violates the policy
    """
    await services.update_password(user, body.currentPassword, body.newPassword)
    return {"message": "Password updated successfully"}

@router.get("/profile", response_model=UserEnvelope)
async def profile(user: User = Depends(get_current_user)):
    return {"user": user_to_dict(user)}

@router.put("/profile", response_model=UserEnvelope)
async def update_profile(body: ProfileUpdateIn, user: User = Depends(get_current_user)):
    """Update the caller's own name and/or address."""
    user = await services.update_profile(user, name=body.name, address=body.address)
    return {"user": user_to_dict(user)}

@router.get("/verify", response_model=VerifyOut)
async def verify(user: User = Depends(get_current_user)):
    return {"message": "Token is valid", "user": user_to_dict(user)}
