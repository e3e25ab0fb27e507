"""
Stride - goal tracking backend with priority-aware daily task ordering
and weekly progress tracking.
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager

from stride.database import init_db
from stride.routes import projects, tasks, weekly_goals
from stride.exceptions import register_exception_handlers
from stride.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Stride API...")
    await init_db()
    logger.info("Database initialized")
    yield
    logger.info("Shutting down Stride API...")


app = FastAPI(
    title="Stride",
    description="Goal tracking with priority-aware daily tasks and weekly progress",
    version="0.1.0",
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(projects.router, prefix="/projects", tags=["Projects"])
app.include_router(tasks.router, prefix="/projects/{project_id}/tasks", tags=["Tasks"])
app.include_router(
    weekly_goals.router,
    prefix="/projects/{project_id}/weekly-goals",
    tags=["Weekly Goals"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
