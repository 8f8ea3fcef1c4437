"""Identifier, timestamp and name helpers shared by the models and services."""

import re
import uuid
from datetime import datetime, timezone

_SLUG_RE = re.compile(r"[^a-z0-9-]")
_SPACE_RE = re.compile(r"\s+")


def new_id() -> str:
    """Opaque 32-character primary key."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_name(name: str) -> str:
    """Lowercase slug: anything outside ``[a-z0-9-]`` becomes a dash.

    >>> sanitize_name("  Mediterranean Food ")
    'mediterranean-food'
    """
    return _SLUG_RE.sub("-", name.strip().lower())


def normalize_voter_name(name: str) -> str:
    """Key used for the one-vote-per-name rule.

    Whitespace is trimmed and collapsed and case is folded, so
    ``" Alice  Smith"`` and ``"alice smith"`` collide.
    """
    return _SPACE_RE.sub(" ", name.strip()).casefold()
