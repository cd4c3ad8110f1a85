"""
Pydantic schemas for authentication endpoints.
Defines request/response models for registration, login and self-service account changes.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr

from .common import AddressStr, NameStr, PasswordStr

class RegisterIn(BaseModel):
    """
    Request model for public registration.
    Any extra field (including "role") is ignored: registration always creates a USER.
    """
    name: NameStr
    email: EmailStr
    password: PasswordStr
    address: AddressStr

class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    Email is not format-checked here so every failed login looks the same.
    """
    email: str
    password: str

class UpdatePasswordIn(BaseModel):
    currentPassword: str
    newPassword: PasswordStr

class ProfileUpdateIn(BaseModel):
    """Self-service profile edit; only provided fields are changed."""
    name: Optional[NameStr] = None
    address: Optional[AddressStr] = None

class UserOut(BaseModel):
    """
    User information returned by the API.
    Never contains the password hash.
    """
    id: int
    name: str
    email: str
    address: str
    role: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

class AuthResponse(BaseModel):
    """
    Response model for successful registration or login.
    Returns the bearer token clients send back on every request.
    """
    message: str
    token: str
    user: UserOut

class UserEnvelope(BaseModel):
    user: UserOut

class VerifyOut(BaseModel):
    message: str
    user: UserOut
