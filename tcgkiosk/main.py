import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tcgkiosk.api import catalog_router, health_router, images_router
from tcgkiosk.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("tcgkiosk"),
)

app.include_router(catalog_router)
app.include_router(health_router)
app.include_router(images_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Kiosk pages may be served from another host
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
