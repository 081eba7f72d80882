from celery import Celery

from modelrocket.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "modelrocket_backend",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["modelrocket.workers.tasks"],
)

# one comparison per worker process at a time
celery_app.conf.update(
    task_default_queue=settings.celery_queue,
    task_routes={"run_comparison": {"queue": settings.celery_queue}},
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    result_expires=settings.celery_result_expires_s,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_soft_time_limit=settings.celery_task_soft_time_limit,
    task_time_limit=settings.celery_task_time_limit,
    task_track_started=True,
    broker_transport_options={"visibility_timeout": settings.celery_task_time_limit},
)
