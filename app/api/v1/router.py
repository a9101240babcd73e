from fastapi import APIRouter

from app.api.v1.endpoints import (
    appointments,
    auth,
    scheduler,
    techs,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(techs.router, prefix="/techs", tags=["techs"])
api_router.include_router(techs.services_router, prefix="/services", tags=["services"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(scheduler.router, prefix="/scheduler", tags=["scheduler"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
