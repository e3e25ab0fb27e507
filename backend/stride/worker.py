"""
ARQ Worker for scheduled background jobs.

This worker handles:
- sweep_missed_tasks: daily cron marking overdue pending tasks as missed

Usage:
    arq stride.worker.WorkerSettings
"""

from arq import cron
from arq.connections import RedisSettings

from stride.config import get_settings
from stride.services.missed import sweep_missed_tasks
from stride.logging_config import setup_logging, get_logger

# Initialize logging for the worker
setup_logging()
logger = get_logger(__name__)

settings = get_settings()


def parse_redis_url(url: str) -> RedisSettings:
    """Parse redis URL into RedisSettings."""
    # redis://localhost:6379/0 -> host=localhost, port=6379, database=0
    url = url.replace("redis://", "")
    database = 0
    if "/" in url:
        url, db_part = url.split("/", 1)
        if db_part:
            database = int(db_part)
    if ":" in url:
        host, port = url.split(":")
        return RedisSettings(host=host, port=int(port), database=database)
    return RedisSettings(host=url, database=database)


async def startup(ctx: dict) -> None:
    logger.info("ARQ Worker starting up...")
    logger.info(f"Redis: {settings.redis_url}")


async def shutdown(ctx: dict) -> None:
    logger.info("ARQ Worker shutting down...")


class WorkerSettings:
    """ARQ Worker configuration."""

    functions = [sweep_missed_tasks]
    cron_jobs = [
        cron(
            sweep_missed_tasks,
            hour={settings.missed_sweep_hour},
            minute={settings.missed_sweep_minute},
            run_at_startup=True,
        ),
    ]
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = parse_redis_url(settings.redis_url)
    max_jobs = 10
    job_timeout = 300  # 5 minutes max per job
