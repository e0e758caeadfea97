"""
Celery worker entry points.

Tasks are acknowledged late and rejected on worker loss, so the broker
redelivers interrupted jobs (at-least-once; no deduplication here).
"""

import logging
from typing import Any

from celery import Celery

from app.core.config import settings
from app.jobs.execute_script import ExecuteScript
from app.models import ExecutionRequest, ScriptReference

logger = logging.getLogger(__name__)

celery_app = Celery("app", broker=settings.CELERY_BROKER_URL)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_always_eager=settings.celery_eager,
)


@celery_app.task(name="app.tasks.execute_script_job")
def execute_script_job(
    script: dict[str, Any],
    user_id: str,
    code: str,
    data: dict[str, Any],
    watcher: str,
    configuration: dict[str, Any] | None = None,
) -> int:
    """Run one script preview attempt; returns the notified status code."""
    request = ExecutionRequest(
        script=ScriptReference.model_validate(script),
        user_id=user_id,
        code=code,
        data=data,
        watcher=watcher,
        configuration=configuration or {},
    )
    return ExecuteScript(request).handle().status


def enqueue_execute_script(
    script: ScriptReference,
    user_id: str,
    code: str,
    data: dict[str, Any],
    watcher: str,
    configuration: dict[str, Any] | None = None,
) -> None:
    args = (script.model_dump(), user_id, code, data, watcher, configuration or {})
    if celery_app.conf.task_always_eager:
        execute_script_job(*args)
    else:
        execute_script_job.delay(*args)
    logger.debug("Queued script %s for user %s (watcher=%s)", script.id, user_id, watcher)
