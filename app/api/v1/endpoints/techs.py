import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.guard import Principal
from app.core.permissions import Permission
from app.dependencies.authz import require_permission
from app.schemas.tech import (
    ServiceListResponse,
    ServiceResponse,
    TechCreate,
    TechListResponse,
    TechResponse,
)
from app.services.tech_service import create_tech, list_services, list_techs

router = APIRouter()
services_router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=TechListResponse, tags=["techs"])
def get_techs(
    include_inactive: bool = False,
    principal: Principal = Depends(require_permission(Permission.VIEW_SCHEDULER)),
    db: Session = Depends(get_db),
) -> TechListResponse:
    """
    List the caller's techs, ordered by name (the scheduler's column order).
    """
    techs = list_techs(db, tenant_id=principal.tenant_id, include_inactive=include_inactive)
    return TechListResponse(techs=[TechResponse.model_validate(t) for t in techs])


@router.post("", response_model=TechResponse, status_code=status.HTTP_201_CREATED, tags=["techs"])
def post_tech(
    tech_in: TechCreate,
    principal: Principal = Depends(require_permission(Permission.MANAGE_TECHS)),
    db: Session = Depends(get_db),
) -> TechResponse:
    try:
        tech = create_tech(db, tenant_id=principal.tenant_id, tech_in=tech_in)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create tech for tenant=%s", principal.tenant_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create tech.",
        ) from exc

    db.refresh(tech)
    return TechResponse.model_validate(tech)


@services_router.get("", response_model=ServiceListResponse, tags=["services"])
def get_services(
    principal: Principal = Depends(require_permission(Permission.VIEW_SCHEDULER)),
    db: Session = Depends(get_db),
) -> ServiceListResponse:
    services = list_services(db, tenant_id=principal.tenant_id)
    return ServiceListResponse(services=[ServiceResponse.model_validate(s) for s in services])
