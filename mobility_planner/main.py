# mobility_planner/main.py

from fastapi import FastAPI

from mobility_planner.api.v1 import routes_health, routes_planning, routes_pricing
from mobility_planner.core.config import settings
from mobility_planner.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Plans walk/drive/walk shared-vehicle trips and estimates their price.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_planning.router, prefix="", tags=["journey-planner"])
    app.include_router(routes_pricing.router, prefix="", tags=["price-estimation"])

    logger.info(
        "{} {} ({}) ready", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT
    )
    return app


app = create_app()
