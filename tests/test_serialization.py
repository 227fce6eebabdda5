"""Tests for JSON encoding with date/time support"""

import json
from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import BaseModel, Field, ValidationError

from kube_bootstrap.serialization import dumps, loads


class ObjectMeta(BaseModel):
    name: str
    creation_timestamp: datetime = Field(alias="creationTimestamp")


class TestDumps:
    """Test request body encoding"""

    def test_plain_json(self):
        """Test that plain JSON types encode as usual"""
        body = {"a": 1, "b": [True, None, "x"], "c": {"d": 1.5}}
        assert json.loads(dumps(body)) == body

    def test_datetime_is_rfc3339(self):
        """Test that aware datetimes encode as ISO 8601 strings"""
        encoded = json.loads(dumps({"t": datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)}))
        assert encoded["t"].startswith("2024-01-02T03:04:05")
        assert datetime.fromisoformat(encoded["t"].replace("Z", "+00:00")) == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=UTC
        )

    def test_offset_preserved(self):
        """Test that non-UTC offsets are kept"""
        tz = timezone(timedelta(hours=2))
        encoded = json.loads(dumps(datetime(2024, 6, 1, 12, 0, tzinfo=tz)))
        assert encoded.endswith("+02:00")

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2024, 1, 2), "2024-01-02"),
            (UUID("12345678-1234-5678-1234-567812345678"), "12345678-1234-5678-1234-567812345678"),
            (Decimal("1.5"), "1.5"),
        ],
    )
    def test_extended_types(self, value, expected):
        """Test date, UUID and Decimal encoding"""
        assert json.loads(dumps({"v": value})) == {"v": expected}

    def test_pydantic_model_uses_aliases(self):
        """Test that models encode with their wire (alias) names"""
        meta = ObjectMeta(
            name="web",
            creationTimestamp=datetime(2024, 1, 2, tzinfo=UTC),
        )
        encoded = json.loads(dumps({"metadata": meta}))
        assert set(encoded["metadata"]) == {"name", "creationTimestamp"}

    def test_none_kept_for_merge_patch(self):
        """Test that null values survive (merge patch deletes keys with null)"""
        assert json.loads(dumps({"metadata": {"labels": {"old": None}}})) == {
            "metadata": {"labels": {"old": None}}
        }

    def test_unsupported_type(self):
        """Test that unknown objects are rejected"""
        with pytest.raises(ValueError):
            dumps({"x": object()})


class TestLoads:
    """Test response body decoding"""

    def test_plain_decode(self):
        """Test decoding without a target type"""
        assert loads(b'{"kind": "Pod", "items": []}') == {"kind": "Pod", "items": []}

    def test_decode_into_model_parses_timestamps(self):
        """Test that RFC 3339 timestamps become aware datetimes"""
        meta = loads(
            b'{"name": "web", "creationTimestamp": "2024-01-02T03:04:05Z"}', ObjectMeta
        )
        assert meta.creation_timestamp == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_decode_into_generic(self):
        """Test decoding into a parametrised container type"""
        result = loads('["2024-01-02T00:00:00Z"]', list[datetime])
        assert result == [datetime(2024, 1, 2, tzinfo=UTC)]

    def test_invalid_json(self):
        """Test that malformed JSON raises ValueError"""
        with pytest.raises(ValueError):
            loads(b"{not json")

    def test_validation_failure(self):
        """Test that a body not matching the target type is rejected"""
        with pytest.raises(ValidationError):
            loads(b'{"name": "web"}', ObjectMeta)
