import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web.backend.routers import habits, insights, logs, settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("zenith.api")


def create_app() -> FastAPI:
    app = FastAPI(title="Zenith Wellness API", version="1.0")

    raw_origins = os.getenv("ZENITH_ALLOWED_ORIGINS", "*")
    allow_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    allow_credentials = "*" not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "Zenith Wellness"}

    app.include_router(habits.router, prefix="/api/v1/habits", tags=["habits"])
    app.include_router(logs.router, prefix="/api/v1/logs", tags=["logs"])
    app.include_router(insights.router, prefix="/api/v1/insights", tags=["insights"])
    app.include_router(settings.router, prefix="/api/v1/settings", tags=["settings"])

    logger.info("Zenith API ready with %d routes", len(app.routes))
    return app


app = create_app()
