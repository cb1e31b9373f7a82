from enum import Enum
from typing import Annotated, Any
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

class Belt(str, Enum):
    white = "white"
    blue = "blue"
    purple = "purple"
    brown = "brown"
    black = "black"

def blank_to_none(v: Any) -> Any:
    """Form fields arrive as strings; "" means "not set", never zero or empty text."""
    if isinstance(v, str) and not v.strip():
        return None
    return v

def none_to_zero(v: Any) -> Any:
    # the store persists 0 stripes as null
    return 0 if v in (None, "") else v

def optional_form(inner: Any) -> Any:
    """`inner` or None, where a blank form value counts as None."""
    return Annotated[inner | None, BeforeValidator(blank_to_none)]

# Write-side field types
StripeCount = optional_form(Annotated[int, Field(ge=0, le=4)])
OptionalId = optional_form(Annotated[str, Field(max_length=64)])
OptionalText = optional_form(Annotated[str, Field(max_length=2000)])
ShortText = optional_form(Annotated[str, Field(max_length=120)])

# Read-side field types
ReadText = Annotated[str | None, BeforeValidator(blank_to_none)]
ReadStripes = Annotated[int, BeforeValidator(none_to_zero)]

class RecordRead(BaseModel):
    """Fields every PocketBase record carries."""
    id: str
    created: ReadText = None
    updated: ReadText = None
    expand: dict[str, Any] | None = None

    model_config = ConfigDict(extra="ignore")
