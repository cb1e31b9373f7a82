from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=120)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)

class SignUp(UserBase):
    # the record store caps passwords at 71 characters (bcrypt limit)
    password: Annotated[str, Field(min_length=8, max_length=71)]
    name: NameStr = ""

class SignIn(BaseModel):
    # not EmailStr: a malformed address gets the same answer as a wrong password
    email: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    password: Annotated[str, Field(min_length=1, max_length=256)]

class AuthOk(BaseModel):
    ok: bool = True

class Me(BaseModel):
    userId: str | None = None
