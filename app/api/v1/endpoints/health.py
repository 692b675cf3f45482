"""Liveness and dependency status for the doctor directory."""

import asyncio
from typing import Literal

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.config import settings
from app.core.redis_client import check_redis_connection
from app.database import check_database_connection

router = APIRouter()

Reachability = Literal["up", "down"]
KeyState = Literal["configured", "missing"]


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    version: str


class DetailedHealthResponse(HealthResponse):
    """Backing store reachability and whether the AI search keys are set."""

    mongodb: Reachability
    redis: Reachability
    completion: KeyState
    translation: KeyState


def _key_state(key: str) -> KeyState:
    return "configured" if key else "missing"


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Service liveness",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="MongoDB, Redis and AI search status",
)
async def detailed_health_check() -> DetailedHealthResponse:
    """
    Check MongoDB and Redis concurrently and report the AI search keys.

    Only an unreachable MongoDB or Redis degrades the overall status. A missing
    translation key just means prompts are searched untranslated.
    """
    mongodb_up, redis_up = await asyncio.gather(
        check_database_connection(), check_redis_connection()
    )

    return DetailedHealthResponse(
        status="healthy" if mongodb_up and redis_up else "degraded",
        version=settings.app_version,
        mongodb="up" if mongodb_up else "down",
        redis="up" if redis_up else "down",
        completion=_key_state(settings.openrouter_api_key),
        translation=_key_state(settings.translation_api_key),
    )


@router.get("/ping", status_code=status.HTTP_200_OK, tags=["Health"], summary="Simple ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
