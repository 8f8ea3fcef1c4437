"""Form and Theme Pydantic schemas.

The JSON API speaks camelCase (``maxVotes``, ``formId``); Python code uses
the snake_case field names. Both spellings are accepted on input.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

API_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ThemeIn(BaseModel):
    """One option inside a form-creation payload."""
    name: str = Field("", max_length=200)
    max_votes: Optional[int] = None

    model_config = API_CONFIG


class ThemeCreate(BaseModel):
    name: str = Field("", max_length=200)
    max_votes: int
    form_id: Optional[str] = None

    model_config = API_CONFIG


class ThemeOut(BaseModel):
    id: str
    name: str
    max_votes: int
    form_id: Optional[str] = None
    vote_count: int = 0

    model_config = API_CONFIG


class FormCreate(BaseModel):
    title: str = Field("", max_length=300)
    description: Optional[str] = None
    themes: List[ThemeIn] = []

    model_config = API_CONFIG


class FormOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    creator_id: str
    created_at: Optional[datetime] = None
    themes: List[ThemeOut] = []

    model_config = API_CONFIG
