import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.guard import Principal
from app.core.permissions import Permission
from app.dependencies.authz import require_permission
from app.schemas.user import UserCreate, UserListResponse, UserResponse
from app.services.user_service import DuplicateEmailError, create_user, list_users

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=UserListResponse, tags=["users"])
def get_users(
    principal: Principal = Depends(require_permission(Permission.MANAGE_USERS)),
    db: Session = Depends(get_db),
) -> UserListResponse:
    users = list_users(db, tenant_id=principal.tenant_id)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED, tags=["users"])
def post_user(
    user_in: UserCreate,
    principal: Principal = Depends(require_permission(Permission.MANAGE_USERS)),
    db: Session = Depends(get_db),
) -> UserResponse:
    """
    Create a staff user in the caller's own organization.
    """
    try:
        user = create_user(db, tenant_id=principal.tenant_id, user_in=user_in)
        db.commit()
    except DuplicateEmailError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create user for tenant=%s", principal.tenant_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create user.",
        ) from exc

    db.refresh(user)
    return UserResponse.model_validate(user)
