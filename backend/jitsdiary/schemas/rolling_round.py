from typing import Annotated
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from .common import Belt, OptionalText, ReadText, RecordRead, ShortText, StripeCount, blank_to_none, optional_form

class Outcome(str, Enum):
    won = "won"
    lost = "lost"
    draw = "draw"

Seconds = optional_form(Annotated[int, Field(ge=0, le=60 * 60)])

class RoundCreate(BaseModel):
    partner_name: ShortText = None
    partner_belt: Belt | None = None
    partner_stripe: StripeCount = None
    outcome: Outcome | None = None
    duration_seconds: Seconds = None
    notes: OptionalText = None

    @field_validator("partner_belt", "outcome", mode="before")
    @classmethod
    def empty_choice(cls, v):
        return blank_to_none(v)

class RoundRead(RecordRead):
    session_id: str
    partner_name: ReadText = None
    partner_belt: ReadText = None
    partner_stripe: int | None = None
    outcome: ReadText = None
    duration_seconds: int | None = None
    notes: ReadText = None
