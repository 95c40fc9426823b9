import logging

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import achievements as achievements_router
from app.routers import books as books_router
from app.routers import habits as habits_router
from app.routers import history as history_router
from app.routers import planner as planner_router
from app.routers import tasks as tasks_router
from app.core.errors import (
    DashboardException,
    dashboard_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from app.services.navigation import PlannerNavigator

configure_logging()
logger = logging.getLogger("app")

app = FastAPI(
    title="Productivity Dashboard API",
    description=(
        "**Personal productivity dashboard for 2026**\n\n"
        "Weighted daily tasks, a year-long habit grid, hierarchical goals "
        "(year / month / week / day), achievements and a reading library "
        "with a generated movie reward.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Planner position is per process and never persisted.
app.state.navigator = PlannerNavigator()

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(DashboardException, dashboard_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(tasks_router.router)
app.include_router(history_router.router)
app.include_router(habits_router.router)
app.include_router(achievements_router.router)
app.include_router(books_router.router)
app.include_router(planner_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """`{"status": "ok"}` plus the planner level; 503 when the collection store is down."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Health check: database unreachable: %s", exc)
        return JSONResponse(status_code=503, content={"status": "error", "db": "unreachable"})
    return {
        "status": "ok",
        "db": "ok",
        "env": settings.APP_ENV,
        "planner_level": app.state.navigator.level.value,
    }
