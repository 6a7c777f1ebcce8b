from fastapi import APIRouter, Depends

from staffdesk.api.deps import require_staff
from staffdesk.api.v1 import dashboard, derive, health

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(
    dashboard.router, prefix="/dashboard", tags=["dashboard"],
    dependencies=[Depends(require_staff)],
)
v1_router.include_router(
    derive.router, prefix="/derive", tags=["derive"],
    dependencies=[Depends(require_staff)],
)
v1_router.include_router(health.router, prefix="/health", tags=["health"])
