"""Tests for the resource record and plan/state containers."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from s3_bucket_provider.state import (
    BucketResourceModel,
    Plan,
    State,
    format_timestamp,
    normalize,
    parse_timestamp,
)


class TestNormalize:
    """Test cases for quote stripping."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ('"my-bucket"', "my-bucket"),
            ('env="prod"', "env=prod"),
            ('""', ""),
            ("plain", "plain"),
            (None, ""),
        ],
    )
    def test_strips_all_quotes(self, value, expected):
        """Test that every double quote is removed."""
        assert normalize(value) == expected


class TestTimestamps:
    """Test cases for RFC 850 timestamps."""

    def test_format(self):
        """Test the rendered layout."""
        moment = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "Monday, 02-Jan-06 15:04:05 UTC"

    def test_format_converts_to_utc(self):
        """Test that aware datetimes in other zones are rendered in UTC."""
        moment = datetime(2006, 1, 2, 17, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "Monday, 02-Jan-06 15:04:05 UTC"

    def test_naive_is_treated_as_utc(self):
        """Test that naive datetimes are assumed to be UTC."""
        assert format_timestamp(datetime(2006, 1, 2, 15, 4, 5)) == "Monday, 02-Jan-06 15:04:05 UTC"

    def test_parse_inverts_format(self):
        """Test that parsing yields the original second."""
        moment = datetime(2024, 7, 19, 8, 30, 1, tzinfo=timezone.utc)
        assert parse_timestamp(format_timestamp(moment)) == moment


class TestBucketResourceModel:
    """Test cases for BucketResourceModel."""

    def test_to_dict_layout(self):
        """Test the persisted state layout."""
        model = BucketResourceModel(name="b", tags="t", date="d", last_updated="l")
        assert model.to_dict() == {"name": "b", "tags": "t", "date": "d", "last_updated": "l"}

    def test_normalized(self):
        """Test that name and tags lose their quotes, timestamps are untouched."""
        model = BucketResourceModel(name='"b"', tags='"t"', date='"d"')
        normalized = model.normalized()
        assert normalized.name == "b"
        assert normalized.tags == "t"
        assert normalized.date == '"d"'

    def test_stamped_sets_equal_timestamps(self):
        """Test that date and last_updated share one instant."""
        model = BucketResourceModel(name="b", tags="t").stamped(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert model.date == model.last_updated == "Monday, 01-Jan-24 00:00:00 UTC"


class TestStateContainer:
    """Test cases for Plan and State containers."""

    def test_get(self):
        """Test deserialization of a valid record."""
        model, diags = Plan({"name": "b", "tags": "t"}).get()
        assert diags.has_error() is False
        assert model == BucketResourceModel(name="b", tags="t")

    def test_get_null(self):
        """Test that reading a null container reports an error."""
        model, diags = State().get()
        assert model is None
        assert diags.has_error() is True
        assert "state" in diags.errors[0].detail

    def test_get_invalid(self):
        """Test that schema errors prevent deserialization."""
        model, diags = Plan({"name": "b"}).get()
        assert model is None
        assert diags.errors[0].attribute == "tags"

    def test_set_and_raw(self):
        """Test that set stores the serialized record."""
        state = State()
        diags = state.set(BucketResourceModel(name="b", tags="t", date="d", last_updated="l"))
        assert diags.has_error() is False
        assert state.raw == {"name": "b", "tags": "t", "date": "d", "last_updated": "l"}

    def test_set_none_removes(self):
        """Test that setting None nulls the container."""
        state = State({"name": "b", "tags": "t"})
        state.set(None)
        assert state.is_null is True
        assert state.raw is None

    def test_raw_is_a_copy(self):
        """Test that callers cannot mutate stored state through raw."""
        state = State({"name": "b", "tags": "t"})
        state.raw["name"] = "other"
        assert state.raw["name"] == "b"

    def test_round_trip_is_byte_identical(self):
        """Test that get followed by set reproduces the same document."""
        raw = {"name": "b", "tags": "t", "date": "d", "last_updated": "l"}
        model, _ = State(raw).get()
        again = State()
        again.set(model)
        assert json.dumps(again.raw, sort_keys=True) == json.dumps(raw, sort_keys=True)

    def test_equality(self):
        """Test container equality by content."""
        assert State({"name": "b", "tags": "t"}) == State({"name": "b", "tags": "t"})
        assert State() != State({"name": "b", "tags": "t"})
