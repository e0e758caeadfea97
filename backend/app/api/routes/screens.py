from typing import Any

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user_id
from app.core.sanitize import sanitize_data
from app.models import SanitizeIn

router = APIRouter(prefix="/screens", tags=["screens"])


@router.post("/sanitize", dependencies=[Depends(get_current_user_id)])
def sanitize_screen_data(body: SanitizeIn) -> dict[str, Any]:
    """
    Sanitize submitted form data. Rich-text fields of ``screen`` (and names
    listed under ``_DO_NOT_SANITIZE``) keep their markup at the top level.
    """
    return sanitize_data(body.data, body.screen)
