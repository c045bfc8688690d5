"""
PhotoShare Backend — Auth Route Handlers
==========================================

What:  POST /signup and POST /login.
How:   Validates the JSON body, delegates to the credential store, and for
       login asks the token issuer for a session token.
Who:   Called by the frontend's register and login forms.

Error responses (handled by global exception handlers):
    HTTP 400: malformed body, duplicate email, invalid credentials
    HTTP 500: database unavailable
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photoshare.database import get_db_session
from photoshare.schemas.common import ErrorResponse
from photoshare.schemas.user import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from photoshare.services.credential_service import credential_service
from photoshare.services.token_service import token_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    responses={
        400: {"description": "Invalid body or email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SignupResponse:
    await credential_service.register(
        db,
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return SignupResponse(message="User registered")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Exchange email and password for a session token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    """
    Authenticate and issue a token.

    The token is valid for ACCESS_TOKEN_EXPIRE_MINUTES (2 hours by default)
    and must be sent in the Authorization header on every protected call.
    """
    user = await credential_service.verify(db, email=body.email, password=body.password)
    token = token_service.issue(user.id)
    logger.info("User %s logged in", user.id)
    return LoginResponse(token=token, user_id=user.id, username=user.username)
