# Grndwrk quotes backend entrypoint: public widget/scheduling API plus dashboard API.

from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.app.core.errors import ApiError, api_error_handler, validation_error_handler
from backend.app.core.logging import configure_logging
from backend.app.core.settings import get_settings
from backend.app.api import dashboard
from backend.app.api import quotes
from backend.app.api import settings as settings_api
from backend.app.api import widget
from backend.app.db.base import Base
from backend.app.db.session import engine

settings = get_settings()
configure_logging()

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(quotes.router)
app.include_router(widget.router)
app.include_router(settings_api.router)
app.include_router(dashboard.router)

# Uploaded quote photos are served from the local bucket directory
Path(settings.media_root).mkdir(parents=True, exist_ok=True)
app.mount("/media", StaticFiles(directory=settings.media_root), name="media")


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
