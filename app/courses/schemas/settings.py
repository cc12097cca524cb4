from pydantic import BaseModel, Field


class CompletionSettingsResponse(BaseModel):
    completion_threshold: int


class CompletionSettingsUpdate(BaseModel):
    completion_threshold: int = Field(..., ge=0, le=100)
