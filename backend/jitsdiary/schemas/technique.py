from typing import Annotated
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from .common import OptionalText, ReadText, RecordRead, optional_form

class TechniqueCategory(str, Enum):
    guard = "guard"
    mount = "mount"
    takedown = "takedown"
    submission = "submission"
    escape = "escape"
    transition = "transition"

TechniqueId = Annotated[str, Field(min_length=1, max_length=64)]
DrillCount = optional_form(Annotated[int, Field(ge=0, le=10_000)])

class TechniqueRead(RecordRead):
    name: str
    category: TechniqueCategory

class SessionTechniquesCreate(BaseModel):
    technique_ids: Annotated[list[TechniqueId], Field(max_length=200)]
    notes: OptionalText = None
    drill_count: DrillCount = None

    @field_validator("technique_ids")
    @classmethod
    def strip_ids(cls, v: list[str]) -> list[str]:
        ids = [t.strip() for t in v]
        if any(not t for t in ids):
            raise ValueError("technique_ids cannot contain blank ids")
        return ids

class SessionTechniqueRead(RecordRead):
    session_id: str
    technique_id: str
    notes: ReadText = None
    drill_count: int | None = None
