"""Card Payload — pure construction of the `cards` row and the profile→card mapping.

Invariants:
    - build_card_payload never emits a blank full_name (ValidationError instead)
    - Every optional CardField is normalized on its own; one bad value never blocks another
    - is_archive is always a bool in the payload (None → False)
    - Keys are the persisted column names (wire contract), nothing else

Design Decisions:
    - Owner id passed in already resolved: identity lookup is IO and lives in services/
    - choose_owner is a pure function of the configured OwnerPolicy so both
      variants of the save flow share one code path
"""

from typing import Any, Mapping

from app.core.domain_types import CardField, OwnerPolicy, ProfileId, UserId
from app.core.errors import ValidationError
from app.core.normalize_fields import normalize_string

FULL_NAME_REQUIRED = "full name required"

# Profile column → card column for everything but the name
PROFILE_TO_CARD_FIELDS = {
    "email": CardField.EMAIL,
    "phone": CardField.PHONE,
    "company": CardField.COMPANY,
    "position": CardField.POSITION,
    "code_phone": CardField.CODE_PHONE,
    "avatar_url": CardField.IMAGE_URL,
}


def require_full_name(full_name: Any) -> str:
    """Normalized full name, or ValidationError if it trims to nothing."""
    normalized = normalize_string(full_name)
    if not normalized:
        raise ValidationError(FULL_NAME_REQUIRED, field="full_name")
    return normalized


def build_card_payload(
    full_name: str,
    user_id: UserId,
    optional_fields: Mapping[str, Any],
    is_archive: bool | None = None,
) -> dict:
    """Row for `cards.insert` — full_name must already be validated."""
    payload: dict[str, Any] = {"full_name": full_name, "user_id": user_id}
    for card_field in CardField:
        payload[card_field.value] = normalize_string(
            optional_fields.get(card_field.value),
        )
    payload["is_archive"] = bool(is_archive) if is_archive is not None else False
    return payload


def map_profile_to_card_fields(profile: Mapping[str, Any]) -> dict[str, Any]:
    """Card field values taken from a profile row (name handled separately)."""
    return {
        card_field.value: profile.get(profile_column)
        for profile_column, card_field in PROFILE_TO_CARD_FIELDS.items()
    }


def choose_owner(
    policy: OwnerPolicy, session_user_id: UserId, profile_id: ProfileId,
) -> UserId:
    """Owner of a card saved from a profile, per the configured policy."""
    if policy == OwnerPolicy.PROFILE:
        return UserId(profile_id)
    return session_user_id
