"""
Unit tests for the Raw Record Mapper.
"""

import pytest

from reviewlens.agents.mapping import (
    CATEGORY_CONTAINER_RULE,
    LISTING_ID_RULE,
    RATING_RULE,
    REVIEW_ID_RULE,
    SUBMITTED_AT_RULE,
    RecordMapper,
    lookup,
    resolve_categories,
    resolve_number,
    resolve_string,
)
from reviewlens.models.review import CategoryRating


@pytest.fixture
def mapper(fixed_clock):
    return RecordMapper(clock=fixed_clock)


@pytest.mark.parametrize("value, expected", [
    (101, 101),
    (101.0, 101),
    (9.5, 9.5),
    ("202", 202),
    (" 12 ", 12),
    ("8.5", 8.5),
    ("1e3", 1000),
    ("", None),
    ("   ", None),
    ("abc", None),
    ("nan", None),
    ("infinity", None),
    ("1_000", None),
    ("\u0661\u0662", None),
    ("\uff11\uff12", None),
    ("+7", 7),
    (".5", 0.5),
    ("5.", 5),
    ("1" + "0" * 400, None),
    (10 ** 400, None),
    (float("inf"), None),
    (float("nan"), None),
    (True, None),
    (None, None),
    ([1], None),
])
def test_resolve_number(value, expected):
    assert resolve_number(value) == expected


def test_resolve_number_returns_int_for_integral_values():
    """Identifiers must stringify as '101', not '101.0'."""
    assert isinstance(resolve_number(101.0), int)
    assert isinstance(resolve_number("101"), int)


@pytest.mark.parametrize("value, expected", [
    ("airbnb", "airbnb"),
    (" ", " "),
    ("", None),
    (None, None),
    (42, None),
])
def test_resolve_string(value, expected):
    assert resolve_string(value) == expected


def test_lookup_walks_nested_dicts():
    record = {"listing": {"id": 7}}
    assert lookup(record, ("listing", "id")) == 7
    assert lookup(record, ("listing", "name")) is None
    assert lookup({"listing": "flat"}, ("listing", "id")) is None


@pytest.mark.parametrize("record, expected", [
    ({"listingId": 1, "listing_id": 2, "listing": {"id": 3}}, 1),
    ({"listing_id": 2, "listing": {"id": 3}}, 2),
    ({"listing": {"id": "3"}}, 3),
    ({"listingId": "abc", "listing_id": 2}, 2),
    ({"listingId": None, "listing": {"id": 3}}, 3),
    ({"listingId": "abc"}, None),
    ({}, None),
])
def test_listing_id_priority(record, expected):
    """First alias that parses as a number wins."""
    assert LISTING_ID_RULE.resolve(record) == expected


@pytest.mark.parametrize("record, expected", [
    ({"rating": 9, "score": 8, "overall": 7}, 9),
    ({"score": "8.5", "overall": 7}, 8.5),
    ({"overall": 7}, 7),
    ({"rating": "n/a"}, None),
])
def test_rating_aliases(record, expected):
    assert RATING_RULE.resolve(record) == expected


@pytest.mark.parametrize("record, expected", [
    ({"submittedAt": "a", "submitted_at": "b"}, "a"),
    ({"submitted_at": "b", "createdAt": "c"}, "b"),
    ({"createdAt": "c", "created_at": "d"}, "c"),
    ({"created_at": "d"}, "d"),
    ({"submittedAt": ""}, None),
])
def test_submitted_at_aliases(record, expected):
    assert SUBMITTED_AT_RULE.resolve(record) == expected


@pytest.mark.parametrize("record, expected", [
    ({"id": 1, "reviewId": 2}, 1),
    ({"reviewId": 2, "review_id": 3}, 2),
    ({"review_id": "3"}, 3),
    ({"externalId": 4}, 4),
    ({"id": "x"}, None),
])
def test_review_id_aliases(record, expected):
    assert REVIEW_ID_RULE.resolve(record) == expected


def test_category_container_takes_first_list():
    record = {"reviewCategory": "not-a-list", "scores": [{"key": "value", "points": 7}]}
    assert CATEGORY_CONTAINER_RULE.resolve(record) == [{"key": "value", "points": 7}]
    assert resolve_categories(record) == [CategoryRating("value", 7)]


def test_resolve_categories_skips_unnamed_entries():
    record = {
        "categories": [
            {"name": "check_in", "score": "9"},
            {"rating": 5},
            "junk",
            {"category": "", "key": "location", "value": None},
        ]
    }

    categories = resolve_categories(record)

    assert categories == [
        CategoryRating("check_in", 9),
        CategoryRating("location", None),
    ]


def test_resolve_categories_without_container():
    assert resolve_categories({"rating": 9}) == []


def test_map_record_with_snake_case_aliases(mapper):
    record = {
        "review_id": 5,
        "listing_id": "202",
        "listing_name": "Camden Loft",
        "score": "8.5",
        "created_at": "2024-01-02",
        "guest_name": "Liam",
        "public_comment": "Great",
        "private_comment": "Oven",
        "platform": "vrbo",
        "reviewType": "host-to-guest",
        "arrival_date": "2023-12-28",
        "language": "en",
        "reviewCategories": [{"category": "value", "rating": 8}],
    }

    review = mapper.map_record(record)

    assert review.id == 5
    assert review.listing_id == 202
    assert review.listing_name == "Camden Loft"
    assert review.rating == 8.5
    assert review.submitted_at == "2024-01-02"
    assert review.guest_name == "Liam"
    assert review.public_review == "Great"
    assert review.private_review == "Oven"
    assert review.channel == "vrbo"
    assert review.type == "host-to-guest"
    assert review.status == "published"
    assert review.stay_date == "2023-12-28"
    assert review.language == "en"
    assert review.review_category == [CategoryRating("value", 8)]


def test_map_record_uses_nested_listing(mapper):
    review = mapper.map_record({"id": 1, "listing": {"id": 7, "name": "Soho Flat"}})

    assert review.listing_id == 7
    assert review.listing_name == "Soho Flat"


def test_map_record_applies_defaults(mapper):
    """Empty strings count as missing."""
    review = mapper.map_record({"id": 1, "listingId": 3, "listingName": "", "channel": ""})

    assert review.listing_name == "Listing 3"
    assert review.channel == "hostaway"
    assert review.type == "guest-to-host"
    assert review.status == "published"
    assert review.guest_name == "Guest"
    assert review.rating is None
    assert review.public_review is None
    assert review.stay_date is None
    assert review.review_category == []


def test_map_record_rejects_missing_listing_id(mapper):
    assert mapper.map_record({"id": 1, "rating": 9}) is None
    assert mapper.map_record({"listingId": "unknown"}) is None


def test_map_record_rejects_non_objects(mapper):
    assert mapper.map_record(["listingId", 1]) is None
    assert mapper.map_record(None) is None


def test_map_record_bad_rating_does_not_reject(mapper):
    review = mapper.map_record({"id": 1, "listingId": 3, "rating": "great"})

    assert review is not None
    assert review.rating is None


def test_missing_submission_date_uses_current_time(mapper):
    """Undated records get the clock's instant, visibly."""
    review = mapper.map_record({"id": 1, "listingId": 3})

    assert review.submitted_at == "2025-01-02T03:04:05.000Z"


def test_missing_id_is_synthesized_from_clock_and_index(mapper):
    reviews, dropped = mapper.map_batch([
        {"id": 10, "listingId": 1},
        {"id": 11, "listingId": 1},
        {"listingId": 1},
    ])

    assert dropped == 0
    # 2025-01-02T03:04:05Z in epoch millis, then the batch index
    assert reviews[2].id == 17357870450002


def test_synthesized_ids_unique_within_batch(mapper):
    reviews, _ = mapper.map_batch([{"listingId": 1} for _ in range(12)])

    assert len({review.id for review in reviews}) == 12


def test_map_batch_counts_dropped_records(mapper):
    reviews, dropped = mapper.map_batch([
        {"id": 1, "listingId": 1},
        {"id": 2},
        "junk",
        {"id": 3, "listing_id": "9"},
    ])

    assert [review.id for review in reviews] == [1, 3]
    assert dropped == 2


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
