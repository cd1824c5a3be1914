from fastapi import APIRouter

from app.features.auth.routes.auth import router as auth_router
from app.features.channels.routes.channels import router as channels_router
from app.features.csv_import.routes.csv_import import router as csv_import_router
from app.features.health.routes.health import router as health_router
from app.features.reports.routes.report import router as reports_router
from app.features.verification.routes.analytics import router as analytics_router
from app.features.verification.routes.verify import router as verify_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(verify_router)
api_router.include_router(channels_router)
api_router.include_router(csv_import_router)
api_router.include_router(reports_router)
api_router.include_router(analytics_router)
