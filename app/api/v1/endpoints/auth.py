from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.guard import Principal
from app.core.errors import Unauthenticated
from app.dependencies.authz import get_current_principal
from app.models.user import User
from app.schemas.auth import LoginRequest, MeResponse, TokenResponse
from app.services.auth_service import (
    AuthenticationError,
    authenticate_user,
    issue_access_token_for_user,
    to_auth_user,
)

router = APIRouter()


@router.post("/login", response_model=TokenResponse, tags=["auth"])
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Email + password login. Returns a bearer token and the user's role and permissions.
    """
    try:
        user = authenticate_user(db, login_data)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    token = issue_access_token_for_user(user)
    return TokenResponse(access_token=token, user=to_auth_user(user))


@router.get("/me", response_model=MeResponse, tags=["auth"])
def read_current_user(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> MeResponse:
    """
    Return the current authenticated user with its permission codes.
    """
    user = db.get(User, principal.id)
    if user is None:
        raise Unauthenticated("User no longer exists")
    return MeResponse(user=to_auth_user(user))
