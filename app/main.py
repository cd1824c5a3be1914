from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.api import api_router
from app.middlewares.bot_detection import BotDetectionMiddleware
from app.middlewares.rate_limit import RateLimitMiddleware
from app.middlewares.security_headers import SecurityHeadersMiddleware
from app.platform.config import settings
from app.platform.exceptions import add_exception_handlers


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Register company channels and check whether a handle belongs to a verified company",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": f"{settings.APP_NAME} API",
            "description": "Check whether a social handle, website, email or phone number belongs to a verified company.",
            "version": settings.APP_VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_PREFIX,
        }

    # Last added runs first: CORS, then security headers, bot detection, rate limiting
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(BotDetectionMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
