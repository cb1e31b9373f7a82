from pydantic import BaseModel, field_validator
from .common import Belt, OptionalId, ReadStripes, ReadText, RecordRead, ShortText, StripeCount, blank_to_none

class ProfileSave(BaseModel):
    belt: Belt | None = None
    stripes: StripeCount = None
    gym_id: OptionalId = None
    display_name: ShortText = None

    @field_validator("belt", mode="before")
    @classmethod
    def empty_belt(cls, v):
        return blank_to_none(v)

class ProfileRead(RecordRead):
    user_id: str
    belt: ReadText = None
    stripes: ReadStripes = 0
    gym_id: ReadText = None
    display_name: ReadText = None
