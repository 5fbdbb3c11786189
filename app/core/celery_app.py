"""
Celery application: broker and result backend from settings.
Tasks are in app.workers.tasks (share unlock housekeeping).
"""
from celery import Celery
from celery.schedules import crontab

from app.core.config import settings

celery_app = Celery(
    "app",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "app.workers.tasks.purge_unlocks",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_track_started=True,
    task_time_limit=600,
    result_expires=86400,
    timezone=settings.app_timezone,
    beat_schedule={
        "purge-expired-share-unlocks": {
            "task": "app.workers.tasks.purge_unlocks.purge_expired_unlocks",
            "schedule": crontab(minute=settings.share_unlock_purge_minute),
        },
    },
)

celery_app.autodiscover_tasks(["app.workers.tasks"])
