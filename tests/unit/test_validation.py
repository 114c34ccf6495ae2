import pytest

from bookbrainz_api.enums import EntityType
from bookbrainz_api.services.browse import parse_browse_query
from bookbrainz_api.services.errors import InvalidIdentifier, InvalidQuery
from bookbrainz_api.services.validation import is_valid_bbid, validate_bbid
from tests.helpers import random_bbid


def test_bbid_validation_accepts_uuids_in_any_case():
    bbid = random_bbid()
    assert is_valid_bbid(bbid)
    assert is_valid_bbid(bbid.upper())
    assert validate_bbid(f" {bbid.upper()} ") == bbid


@pytest.mark.parametrize("value", ["not-a-uuid", "", None, "96a23368-85a1-4559-b3df-16833893d86"])
def test_bbid_validation_rejects_malformed_values(value):
    assert not is_valid_bbid(value)
    with pytest.raises(InvalidIdentifier):
        validate_bbid(value)


def test_parse_browse_query_builds_criteria():
    bbid = random_bbid()
    criteria = parse_browse_query(
        {"edition-group": bbid, "format": "ebook", "language": "english", "author": None},
        target_kind=EntityType.edition,
    )
    assert criteria.anchor_id == bbid
    assert criteria.anchor_kind is EntityType.edition_group
    assert criteria.target_kind is EntityType.edition
    assert criteria.format == "ebook"
    assert criteria.language == "english"


def test_parse_browse_query_requires_an_anchor_key():
    with pytest.raises(InvalidQuery, match="is required"):
        parse_browse_query({"format": "ebook"}, target_kind=EntityType.edition)


def test_parse_browse_query_rejects_several_anchor_keys():
    with pytest.raises(InvalidQuery, match="Only one of"):
        parse_browse_query({"author": random_bbid(), "work": random_bbid()}, target_kind=EntityType.edition)


def test_parse_browse_query_rejects_malformed_anchor_id():
    with pytest.raises(InvalidIdentifier):
        parse_browse_query({"publisher": "not-a-uuid"}, target_kind=EntityType.edition)


def test_invalid_query_is_a_value_error():
    assert issubclass(InvalidQuery, ValueError)
