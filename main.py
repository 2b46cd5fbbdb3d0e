# main.py
import logging

import uvicorn
from fastapi import FastAPI

from config.settings import settings
from core.logging import configure_logging
from modules.personnel import routes as personnel_routes

configure_logging()
logger = logging.getLogger(__name__)

# ----- App instance -----
app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

# ----- Routers -----
app.include_router(
    personnel_routes.api_router,
    prefix=settings.API_PREFIX,
    tags=["Personnel API"],
)

@app.on_event("startup")
def on_startup():
    logger.info("%s %s ready (prefix=%s)", settings.APP_NAME, settings.APP_VERSION, settings.API_PREFIX)

@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}

# ----- Entrypoint -----
if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
