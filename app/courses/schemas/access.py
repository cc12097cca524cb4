from typing import Literal

from pydantic import BaseModel

AccessStatusType = Literal["allowed", "locked", "not_found"]


class LectureAccessResponse(BaseModel):
    status: AccessStatusType
    allowed: bool
    lecture_id: str | None = None
    locked_by: str | None = None
