from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models.user import User
from app.courses.schemas.settings import CompletionSettingsResponse, CompletionSettingsUpdate
from app.courses.services.completion_settings_service import CompletionSettingsService
from app.db.session import get_db

router = APIRouter()


@router.get("/settings/video-completion", response_model=CompletionSettingsResponse)
async def get_video_completion_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CompletionSettingsResponse:
    return CompletionSettingsResponse(
        completion_threshold=CompletionSettingsService.get_threshold(db)
    )


@router.put("/admin/settings/video-completion", response_model=CompletionSettingsResponse)
async def update_video_completion_settings(
    request: CompletionSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> CompletionSettingsResponse:
    """Change the completion threshold (admin only). Not applied retroactively."""
    threshold = CompletionSettingsService.set_threshold(request.completion_threshold, db)
    return CompletionSettingsResponse(completion_threshold=threshold)
