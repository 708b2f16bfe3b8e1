from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coursemap.api.routes import router as api_router
from coursemap.core.config import settings
from coursemap.core.database import engine
from coursemap.core.errors import StoreError
from coursemap.core.logging import configure_logging
from coursemap.models.base import Base
import coursemap.models  # noqa: F401

logger = configure_logging(settings.log_level)

app = FastAPI(title="Course Map API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Record store error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


@app.get("/health")
def health_check():
    return {"status": "ok", "environment": settings.environment}
