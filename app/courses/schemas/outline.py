from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.core.datetime_utils import UTCDatetime
from app.courses.services.positions import normalize_positions


class LectureInput(BaseModel):
    id: UUID | None = None
    title: str = Field(..., max_length=500)
    description: str | None = None
    # Ignored on input: array order is authoritative
    position: int = 0
    duration: int | None = Field(None, ge=0)
    video_url: str | None = Field(None, max_length=2048)
    is_free: bool = False
    has_homework: bool = False
    requires_homework_completion: bool = False


class SectionInput(BaseModel):
    id: UUID | None = None
    title: str = Field(..., max_length=500)
    position: int = 0
    lectures: list[LectureInput] = []


class OutlineUpdateRequest(BaseModel):
    sections: list[SectionInput] = []
    requested_at: datetime | None = None

    @model_validator(mode="after")
    def assign_positions(self) -> "OutlineUpdateRequest":
        normalize_positions(self.sections)
        for section in self.sections:
            normalize_positions(section.lectures)
        return self


class LectureResponse(BaseModel):
    id: str
    section_id: str
    title: str
    description: str | None = None
    position: int
    duration: int | None = None
    video_url: str | None = None
    is_free: bool
    has_homework: bool
    requires_homework_completion: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    class Config:
        from_attributes = True


class SectionResponse(BaseModel):
    id: str
    course_id: str
    title: str
    position: int
    created_at: UTCDatetime
    updated_at: UTCDatetime
    lectures: list[LectureResponse] = []

    class Config:
        from_attributes = True


class OutlineResponse(BaseModel):
    course_id: str
    lecture_count: int
    sections: list[SectionResponse] = []


class ReconcileResponse(BaseModel):
    course_id: str
    sections_created: int
    sections_updated: int
    sections_deleted: int
    lectures_created: int
    lectures_updated: int
    lectures_deleted: int
    lecture_count: int
    lecture_count_updated: bool
    outline: list[SectionResponse] = []


class CurriculumLecture(BaseModel):
    id: str
    title: str
    position: int
    duration: int | None = None
    is_free: bool
    has_homework: bool
    requires_homework_completion: bool
    completed: bool = False


class CurriculumSection(BaseModel):
    id: str
    title: str
    position: int
    lectures: list[CurriculumLecture] = []


class CurriculumResponse(BaseModel):
    course_id: str
    title: str
    lecture_count: int
    sections: list[CurriculumSection] = []
