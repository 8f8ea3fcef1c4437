"""
ThemeVote – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them
through a single ``from app.models import *`` import.
"""

from app.models.user import User      # noqa: F401
from app.models.form import Form      # noqa: F401
from app.models.theme import Theme    # noqa: F401
from app.models.vote import Vote      # noqa: F401
