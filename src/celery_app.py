"""Celery application configuration."""

from celery import Celery
from celery.signals import setup_logging

from src.config import get_settings
from src.database import configure_logging

settings = get_settings()

app = Celery(
    "gift_coordination",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.favorites"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,
    task_soft_time_limit=90,
    beat_schedule={
        "reconcile-all-favorites": {
            "task": "src.tasks.favorites.reconcile_all_favorites",
            "schedule": 3600.0,  # hourly drift sweep
        },
    },
)


@setup_logging.connect
def _configure_worker_logging(**kwargs) -> None:
    configure_logging()
