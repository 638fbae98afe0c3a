from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections, create_tables
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging

from .routers import auth, health, teachers

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting EduApp API")

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables created")

    yield

    logger.info("Shutting down EduApp API")
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="EduApp API - Teacher Registration",
    description="Teacher registration with uniqueness checks and filtered, paginated listings",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(teachers.router)

@app.get("/")
async def root():
    return {
        "message": "EduApp API",
        "version": settings.app_version,
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
