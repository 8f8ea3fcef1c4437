"""User Pydantic schemas — sign-up, sign-in, public output."""

from pydantic import BaseModel, EmailStr, Field


class Credentials(BaseModel):
    """Fields submitted to both /auth/signup and /auth/signin."""
    email: EmailStr
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    """Public user representation returned by the API."""
    id: str
    email: str

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    user: UserOut
