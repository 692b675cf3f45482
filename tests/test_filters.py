"""Tests for filter expression rendering."""

import re

import pytest

from app.search.filters import (
    And,
    Compare,
    ElemMatch,
    Equals,
    Exists,
    In,
    NotEquals,
    Or,
    Regex,
    any_of,
)


def test_field_nodes_render():
    """Test each field node renders to its MongoDB operator."""
    assert Equals("isDeleted", False).to_mongo() == {"isDeleted": False}
    assert NotEquals("closed_days", "Friday").to_mongo() == {"closed_days": {"$ne": "Friday"}}
    assert Compare("start", "lte", "12:00").to_mongo() == {"start": {"$lte": "12:00"}}
    assert In("_id", (1, 2)).to_mongo() == {"_id": {"$in": [1, 2]}}
    assert Exists("slots.1").to_mongo() == {"slots.1": {"$exists": True}}


def test_regex_escapes_user_text():
    """Test regex metacharacters in user text are matched literally."""
    rendered = Regex("district", "Cox's Bazar (Sadar)").to_mongo()
    assert rendered == {
        "district": {"$regex": re.escape("Cox's Bazar (Sadar)"), "$options": "i"}
    }


def test_raw_regex_is_used_verbatim():
    assert Regex("name", "^Dr", raw=True).to_mongo() == {"name": {"$regex": "^Dr", "$options": "i"}}


def test_compare_rejects_unknown_operator():
    with pytest.raises(ValueError):
        Compare("start", "between", "12:00")


def test_elem_match_on_scalar_array():
    """Test clauses with an empty field apply to the array element itself."""
    rendered = ElemMatch("specialtyList", (Regex("", "Dental"),)).to_mongo()
    assert rendered == {"specialtyList": {"$elemMatch": {"$regex": "Dental", "$options": "i"}}}


def test_elem_match_on_document_array():
    rendered = ElemMatch(
        "time_slots",
        (Compare("start_time_24hr", "lte", "12:00"), Compare("end_time_24hr", "gte", "08:00")),
    ).to_mongo()
    assert rendered == {
        "time_slots": {
            "$elemMatch": {
                "start_time_24hr": {"$lte": "12:00"},
                "end_time_24hr": {"$gte": "08:00"},
            }
        }
    }


def test_logical_nodes_render():
    """Test And/Or render lists and collapse single clauses."""
    a, b = Equals("a", 1), Equals("b", 2)
    assert And((a, b)).to_mongo() == {"$and": [{"a": 1}, {"b": 2}]}
    assert Or((a, b)).to_mongo() == {"$or": [{"a": 1}, {"b": 2}]}
    assert And((a,)).to_mongo() == {"a": 1}
    assert any_of(a, b) == Or((a, b))


def test_nodes_are_immutable_and_comparable():
    """Test nodes are frozen values."""
    node = Equals("a", 1)
    assert node == Equals("a", 1)
    with pytest.raises(AttributeError):
        node.field = "b"  # type: ignore[misc]
