"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import doctors, health, specializations

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])
api_router.include_router(
    specializations.router, prefix="/specializations", tags=["Specializations"]
)
