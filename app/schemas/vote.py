"""Vote Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.form import API_CONFIG


class VoteCreate(BaseModel):
    theme_id: str = ""
    voter_name: str = Field("", max_length=200)

    model_config = API_CONFIG


class VoteOut(BaseModel):
    id: str
    theme_id: str
    voter_name: str
    created_at: Optional[datetime] = None

    model_config = API_CONFIG
