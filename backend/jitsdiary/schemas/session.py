from typing import Annotated
from enum import Enum
from pydantic import BaseModel, Field, StringConstraints
from .common import OptionalId, OptionalText, ReadText, RecordRead, ShortText, optional_form
from .rolling_round import RoundRead
from .technique import SessionTechniqueRead

class SessionType(str, Enum):
    gi = "gi"
    no_gi = "no_gi"
    open_mat = "open_mat"

# "YYYY-MM-DD" from the date picker, or a full datetime
DateStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=40)]
Minutes = optional_form(Annotated[int, Field(ge=0, le=24 * 60)])

class SessionCreate(BaseModel):
    date: DateStr
    session_type: SessionType
    gym_id: OptionalId = None
    duration_minutes: Minutes = None
    coach: ShortText = None
    notes: OptionalText = None

class SessionUpdate(BaseModel):
    # date/session_type are only written when sent; the optional fields are
    # always written so that clearing them in the form clears them in the store
    date: DateStr | None = None
    session_type: SessionType | None = None
    gym_id: OptionalId = None
    duration_minutes: Minutes = None
    coach: ShortText = None
    notes: OptionalText = None

class SessionRead(RecordRead):
    user_id: str
    date: str
    session_type: SessionType
    gym_id: ReadText = None
    duration_minutes: int | None = None
    coach: ReadText = None
    notes: ReadText = None

class SessionPage(BaseModel):
    page: int
    perPage: int
    totalItems: int
    totalPages: int
    items: list[SessionRead]

class SessionDetail(BaseModel):
    session: SessionRead
    rounds: list[RoundRead]
    techniques: list[SessionTechniqueRead]
