"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from accounts.config import get_settings

settings = get_settings()

app = Celery(
    "accounts",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["accounts.tasks.cleanup"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,  # 4 minutes soft limit
    beat_schedule={
        "delete-inactive-users": {
            "task": "accounts.tasks.cleanup.delete_inactive_users",
            "schedule": crontab(hour=3, minute=0),
        },
    },
)
