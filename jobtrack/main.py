import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ✅ Import All API Routes
from jobtrack.api.routes import (
    applications,
    auth,
    dashboard,
    health,
    job_listings,
    news_scraps,
    routines,
    schedules,
    stickers,
    time_logs,
)
from jobtrack.core import config
from jobtrack.core.exceptions import JobTrackError
from jobtrack.core.logging_config import setup_logging
from jobtrack.db.init_db import init_db

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if config.RUN_MIGRATIONS:
        from jobtrack.db.migrate import run_migrations
        run_migrations()
    else:
        init_db()
    logger.info("Job Track API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Job Track API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR HANDLERS
# ============================================

@app.exception_handler(JobTrackError)
async def job_track_error_handler(request: Request, exc: JobTrackError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(job_listings.router)
app.include_router(applications.router)
app.include_router(schedules.router)
app.include_router(routines.router)
app.include_router(news_scraps.router)
app.include_router(time_logs.router)
app.include_router(time_logs.goals_router)
app.include_router(stickers.router)
app.include_router(dashboard.router)
app.include_router(health.router)


# ============================================
# ✅ ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "Job Track API running"}
