from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from typing import Any
from datetime import timedelta
from core.config import settings
from core.security import create_access_token, verify_admin_credentials
from schemas.auth import AdminUser, Token
from api.deps import get_current_admin_user
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()) -> Any:
    """
    OAuth2 compatible token login for the admin panel
    """
    if not verify_admin_credentials(form_data.username, form_data.password):
        logger.warning(f"Failed admin login for '{form_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        subject=form_data.username, expires_delta=access_token_expires
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=AdminUser)
async def read_admin_me(current_user: AdminUser = Depends(get_current_admin_user)) -> Any:
    """
    Get the logged in admin
    """
    return current_user
