"""
Authentication router.
Handles registration, login and the current-user lookup.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from shared.config.constants import Roles
from shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from shared.config.settings import settings
from shared.infrastructure.db import get_db, safe_commit
from shared.security.auth import current_user_context, sign_jwt
from shared.security.password import hash_password, verify_password
from shared.security.rate_limit import LOGIN_RATE_LIMIT, limiter
from shared.utils.exceptions import ConflictError, UnauthorizedError
from shared.utils.schemas import LoginRequest, LoginResponse, RegisterRequest, UserInfo
from slowapi.util import get_remote_address
from store_api.models import User


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _login_response(user: User) -> LoginResponse:
    access_token = sign_jwt({
        "sub": user.id,
        "role": user.role,
        "email": user.email,
    })
    return LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserInfo(id=user.id, email=user.email, name=user.name, role=user.role),
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Create a customer account (role USER) and log it in.

    Emails are unique case-insensitively.
    """
    email = body.email.lower()
    if db.scalar(select(User).where(User.email == email)) is not None:
        audit_auth_event(
            "REGISTER", email=email, success=False, reason="email_taken",
            ip_address=get_remote_address(request),
        )
        raise ConflictError("An account with this email already exists")

    user = User(
        email=email,
        password=hash_password(body.password),
        name=body.name.strip(),
        role=Roles.USER,
    )
    db.add(user)
    safe_commit(db)
    db.refresh(user)

    audit_auth_event("REGISTER", user_id=user.id, email=user.email, ip_address=get_remote_address(request))
    return _login_response(user)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate and return an access token.

    The token contains:
    - sub: user ID
    - role: USER, EMPLOYEE or ADMIN
    - email: user's email

    Rate limited per client IP (slowapi).
    """
    ip_address = get_remote_address(request)
    user = db.scalar(
        select(User).where(User.email == body.email.lower(), User.is_active.is_(True))
    )

    if user is None or not verify_password(body.password, user.password):
        reason = "user_not_found" if user is None else "invalid_password"
        logger.warning("LOGIN_FAILED", email=mask_email(body.email), reason=reason)
        audit_auth_event(
            "LOGIN", user_id=user.id if user else None, email=body.email,
            success=False, reason=reason, ip_address=ip_address,
        )
        raise UnauthorizedError("Invalid email or password")

    audit_auth_event("LOGIN", user_id=user.id, email=user.email, ip_address=ip_address)
    logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id, role=user.role)
    return _login_response(user)


@router.get("/me", response_model=UserInfo)
def me(user: dict = Depends(current_user_context), db: Session = Depends(get_db)) -> UserInfo:
    """Current user, read fresh from the database."""
    account = db.get(User, user["sub"])
    if account is None or not account.is_active:
        raise UnauthorizedError("User no longer exists")
    return UserInfo(id=account.id, email=account.email, name=account.name, role=account.role)
