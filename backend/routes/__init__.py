"""FastAPI API endpoints under /api.

Endpoint groups: health, fronts (document fetch/save, secret and portent
toggles). This is the reference implementation of the store the front
manager client talks to.
"""

from fastapi import APIRouter

from .fronts import router as fronts_router
from .health import router as health_router

router = APIRouter()
router.include_router(health_router)
router.include_router(fronts_router)
