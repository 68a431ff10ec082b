"""
Authentication API endpoints: login, token refresh and the current user.

There is a single shop account; tokens are stateless JWTs.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.security import (
    authenticate_user,
    get_current_user,
    get_password_hash,
    issue_tokens,
    verify_password,
    verify_refresh_token,
)
from app.logging_config import get_logger
from app.middleware import limiter
from app.models.user import User
from app.schemas.user import (
    UserResponse,
    LoginRequest,
    LoginResponse,
    TokenRefresh,
    Token,
    UserChangePassword
)

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])

UNAUTHORIZED = {"WWW-Authenticate": "Bearer"}


@router.post("/login", response_model=LoginResponse)
@limiter.limit(f"{settings.login_rate_limit_per_minute}/minute")
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate and return JWT tokens.

    - **username**: Account username
    - **password**: Account password
    """
    user = await authenticate_user(db, credentials.username, credentials.password)
    if user is None:
        logger.warning(f"[AUTH] Failed login for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers=UNAUTHORIZED,
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

    logger.info(f"[AUTH] {user.username} logged in")
    return LoginResponse(**issue_tokens(user.id), user=UserResponse.model_validate(user))


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_data: TokenRefresh,
    db: AsyncSession = Depends(get_db)
):
    """Exchange a refresh token for a new token pair."""
    user = await db.get(User, verify_refresh_token(token_data.refresh_token))

    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers=UNAUTHORIZED,
        )

    return Token(**issue_tokens(user.id))


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/change-password")
async def change_password(
    password_data: UserChangePassword,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Change the logged-in user's password after checking the current one."""
    if not verify_password(password_data.current_password, current_user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect current password")

    current_user.password_hash = get_password_hash(password_data.new_password)
    await db.commit()

    logger.info(f"[AUTH] {current_user.username} changed password")
    return {"message": "Password updated successfully"}


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    """Nothing to revoke server-side; the client drops its tokens."""
    return {"message": "Logged out successfully"}
