import re
from collections.abc import Mapping

from bookbrainz_api.enums import EntityType
from bookbrainz_api.services.errors import InvalidIdentifier, InvalidQuery, ValidationError

BBID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def require(condition: bool, message: str, error: type[ValidationError] = ValidationError) -> None:
    if not condition:
        raise error(message)


def is_valid_bbid(value: str | None) -> bool:
    return bool(value) and BBID_PATTERN.match(value.strip()) is not None


def validate_bbid(value: str | None) -> str:
    require(is_valid_bbid(value), f"Invalid BBID: {value}", InvalidIdentifier)
    return value.strip().lower()


def single_anchor_key(params: Mapping[str, str | None], allowed: Mapping[str, EntityType]) -> tuple[str, EntityType]:
    present = [key for key in allowed if params.get(key)]
    expected = ", ".join(allowed)
    require(bool(present), f"One of {expected} is required", InvalidQuery)
    require(len(present) == 1, f"Only one of {expected} may be given, got: {', '.join(present)}", InvalidQuery)
    key = present[0]
    return key, allowed[key]
