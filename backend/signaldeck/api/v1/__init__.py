"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from signaldeck.api.v1.endpoints import analysis, history, service

router = APIRouter()

# Include all endpoint routers
router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
router.include_router(history.router, prefix="/history", tags=["Prediction History"])
router.include_router(service.router, tags=["Service"])
