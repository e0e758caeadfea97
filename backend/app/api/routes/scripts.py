"""
Script preview: sanitize the input payload and queue an ExecuteScript job.

The outcome is not returned here; it arrives on the user's notification
channel, matched by ``watcher``.
"""

import logging

from fastapi import APIRouter, status

from app.api.deps import CurrentUserId
from app.core.sanitize import sanitize_data
from app.models import ScriptPreviewIn, ScriptPreviewOut
from app.tasks import enqueue_execute_script

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scripts", tags=["scripts"])


@router.post(
    "/preview",
    response_model=ScriptPreviewOut,
    status_code=status.HTTP_202_ACCEPTED,
)
def preview_script(body: ScriptPreviewIn, user_id: CurrentUserId) -> ScriptPreviewOut:
    data = sanitize_data(body.data, body.screen)
    enqueue_execute_script(
        body.script,
        user_id,
        body.code,
        data,
        body.watcher,
        body.config,
    )
    return ScriptPreviewOut(watcher=body.watcher)
