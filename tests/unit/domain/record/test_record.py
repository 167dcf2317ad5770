"""Tests for the Record aggregate."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pulse.domain.project.model.value import DataSourceId
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.value import RecordId


class TestRecordCreate:
    def test_missing_date_defaults_to_today_utc(self):
        today = datetime.now(UTC).date()

        record = Record.create(data_source_id=DataSourceId(1), value=3.0)

        assert (record.year, record.month, record.day) == (today.year, today.month, today.day)

    def test_explicit_date_is_kept(self):
        record = Record.create(
            data_source_id=DataSourceId(1), value=3.0, year=2014, month=2, day=28
        )

        assert (record.year, record.month, record.day) == (2014, 2, 28)

    def test_partial_date_fills_only_missing_parts(self):
        record = Record.create(data_source_id=DataSourceId(1), value=1.0, year=2001)

        assert record.year == 2001
        assert record.month == datetime.now(UTC).month

    def test_dimensions_default_to_empty(self):
        record = Record.create(data_source_id=DataSourceId(1), value=1.0)

        assert record.dimensions == {}
        assert record.id is None

    def test_month_out_of_range_is_invalid(self):
        with pytest.raises(ValidationError):
            Record.create(data_source_id=DataSourceId(1), value=1.0, month=13)

    def test_container_dimension_value_is_invalid(self):
        with pytest.raises(ValidationError):
            Record.create(
                data_source_id=DataSourceId(1), value=1.0, dimensions={"tags": ["a", "b"]}
            )

    @pytest.mark.parametrize("key", ["", "k" * 65])
    def test_dimension_key_must_fit_storage(self, key: str):
        with pytest.raises(ValidationError):
            Record.create(data_source_id=DataSourceId(1), value=1.0, dimensions={key: "x"})

    def test_scalar_dimension_types_are_preserved(self):
        record = Record.create(
            data_source_id=DataSourceId(1),
            value=1.0,
            dimensions={"client": "ANDROID", "build": 42, "beta": True, "ratio": 0.5},
        )

        assert record.dimensions == {"client": "ANDROID", "build": 42, "beta": True, "ratio": 0.5}
        assert isinstance(record.dimensions["beta"], bool)


class TestRecordFlatten:
    def test_flatten_merges_dimensions_with_fixed_fields(self):
        record = Record(
            id=RecordId(7),
            data_source_id=DataSourceId(2),
            value=98.0,
            year=2014,
            month=1,
            day=2,
            dimensions={"client": "ANDROID"},
        )

        assert record.flatten() == {
            "id": 7,
            "data_source_id": 2,
            "value": 98.0,
            "year": 2014,
            "month": 1,
            "day": 2,
            "client": "ANDROID",
        }
