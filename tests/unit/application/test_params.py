"""Tests for request parsing helpers."""

import pytest

from pulse.application.api.v1.params import build, parse_dimensions
from pulse.domain.record.command.create import CreateRecord
from pulse.domain.record.model.value import DimensionFilter
from pulse.domain.shared.error import InvalidFilterError, ValidationError


class TestParseDimensions:
    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_means_no_filters(self, raw):
        assert parse_dimensions(raw) == []

    def test_typed_values(self):
        filters = parse_dimensions('[{"key": "client", "value": "ANDROID"}, {"key": "build", "value": 3}]')

        assert filters == [
            DimensionFilter(key="client", value="ANDROID"),
            DimensionFilter(key="build", value=3),
        ]

    def test_malformed_json(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            parse_dimensions("[{key: client}")

        assert exc_info.value.field == "dimensions"

    @pytest.mark.parametrize(
        "raw",
        ['{"key": "client", "value": "x"}', '[{"value": "x"}]', '[{"key": "c", "value": [1]}]'],
    )
    def test_wrong_shape(self, raw: str):
        with pytest.raises(InvalidFilterError):
            parse_dimensions(raw)


class TestBuild:
    def test_valid_input(self):
        cmd = build(CreateRecord, project_uuid="p", key="sessions", value=1.5, year=2024)

        assert cmd.year == 2024
        assert cmd.dimensions == {}

    def test_invalid_input_names_the_field(self):
        with pytest.raises(ValidationError) as exc_info:
            build(CreateRecord, project_uuid="p", key="sessions", value=1.0, month=13)

        assert exc_info.value.field == "month"

    @pytest.mark.parametrize("key", ["", "k" * 65])
    def test_dimension_key_outside_column_width_is_rejected(self, key: str):
        with pytest.raises(ValidationError) as exc_info:
            build(CreateRecord, project_uuid="p", key="sessions", value=1.0, dimensions={key: "x"})

        assert exc_info.value.field is not None
        assert exc_info.value.field.startswith("dimensions")

    def test_dimension_key_at_column_width_is_accepted(self):
        cmd = build(
            CreateRecord, project_uuid="p", key="sessions", value=1.0, dimensions={"k" * 64: "x"}
        )

        assert list(cmd.dimensions) == ["k" * 64]
