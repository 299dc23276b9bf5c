import logging

from fastapi import FastAPI

from . import settings
from .routes.core import router as core_router
from .routes.stations import router as stations_router
from .stations import load_stations

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_stations()
    app = FastAPI(title=f"{settings.APP_NAME} Stream Relay", version=settings.APP_VERSION)
    app.include_router(core_router)
    app.include_router(stations_router)
    return app

app = create_app()
