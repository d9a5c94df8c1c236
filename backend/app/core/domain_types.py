"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CardId, ProfileId wrap str — ids cross the wire as strings
    - A ProfileId is also a valid UserId (profiles are keyed by auth user id)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and load from env vars without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
CardId = NewType("CardId", str)
ProfileId = NewType("ProfileId", str)


# ─── Enums ───────────────────────────────────────────────────────

class OwnerPolicy(str, Enum):
    """Who owns a card saved from someone else's profile."""
    SESSION = "session"    # the viewer who pressed save
    PROFILE = "profile"    # the person the profile describes


class CardField(str, Enum):
    """Optional card columns normalized independently on creation."""
    EMAIL = "email"
    PHONE = "phone"
    COMPANY = "company"
    POSITION = "position"
    IMAGE_URL = "image_url"
    CODE_PHONE = "code_phone"
