"""
PhotoShare Backend — Auth Request/Response Schemas
====================================================

What:  Pydantic models for POST /signup and POST /login.
How:   FastAPI validates request bodies against these; a missing or malformed
       field becomes a 400 `validation_error` (see main.py).

The login response uses the camelCase keys existing clients already read
(`userId`) via a field alias; FastAPI serializes response models
by alias.
"""

import uuid

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50, description="Display name")
    email: EmailStr = Field(description="Login email; must be unique")
    password: str = Field(min_length=1, max_length=1024, description="Plaintext password")


class SignupResponse(BaseModel):
    success: bool = True
    message: str = "User registered"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)


class LoginResponse(BaseModel):
    """
    What:  Session token plus the identity it belongs to.
    Who:   The client stores `token` and sends it in the Authorization header
           on every protected call; `userId` lets it recognise its own photos.
    """
    success: bool = True
    token: str = Field(description="Signed session token, valid for a fixed window")
    user_id: uuid.UUID = Field(alias="userId")
    username: str

    model_config = {"populate_by_name": True}
