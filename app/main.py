# app/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging

from app.api.auth import router as auth_router
from app.api.project import router as project_router
from app.api.report import router as report_router
from app.api.stream import router as stream_router

from app.core.events import ChangeFeed
from app.core.settings import settings
from app.core.exceptions import (
    AuthFailure,
    ExportFailure,
    NotFoundError,
    ReadFailure,
    ValidationFailure,
    WriteFailure,
)
from app.database import engine
from app.models.base import Base
from app import models  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="Construction Progress Board API",
    version="1.0.0",
    description="Three-period rolling schedule, site reports, audit trail and archival for construction projects",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# one feed per application; handed to endpoints through get_change_feed
app.state.change_feed = ChangeFeed(max_queue_size=settings.SSE_QUEUE_SIZE)

app.include_router(auth_router)
app.include_router(project_router)
app.include_router(report_router)
app.include_router(stream_router)

@app.get("/", tags=["Health"])
def root():
    return {"status": "Construction Progress Board API is running!"}

@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}

@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    logger.info("Starting Construction Progress Board API")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping Construction Progress Board API")

@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(AuthFailure)
async def auth_failure_handler(request: Request, exc: AuthFailure):
    return JSONResponse(status_code=401, content={"detail": str(exc)}, headers={"WWW-Authenticate": "Bearer"})

@app.exception_handler(ReadFailure)
async def read_failure_handler(request: Request, exc: ReadFailure):
    logger.error(f"Read failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc), "error": "read_failure"})

@app.exception_handler(WriteFailure)
async def write_failure_handler(request: Request, exc: WriteFailure):
    logger.error(f"Write failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc), "error": "write_failure"})

@app.exception_handler(ExportFailure)
async def export_failure_handler(request: Request, exc: ExportFailure):
    logger.error(f"Export failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"{exc}. Nothing was deleted.", "error": "export_failure"},
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=bool(os.getenv("DEBUG", False))
    )
