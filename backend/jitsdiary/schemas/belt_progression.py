from typing import Annotated
from pydantic import BaseModel, StringConstraints
from .common import Belt, OptionalId, OptionalText, ReadStripes, ReadText, RecordRead, StripeCount

PromotedOn = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=40)]

class BeltProgressionCreate(BaseModel):
    belt: Belt
    stripes: StripeCount = None
    promoted_on: PromotedOn
    gym_id: OptionalId = None
    notes: OptionalText = None

class BeltProgressionRead(RecordRead):
    user_id: str
    belt: Belt
    stripes: ReadStripes = 0
    promoted_on: str
    gym_id: ReadText = None
    notes: ReadText = None
