"""Tests for the records CLI helpers."""

import json

import pytest

from pulse.cli.commands.records import _dimensions_param, _headers, get_server_url


class TestDimensionsParam:
    def test_no_dimensions(self):
        assert _dimensions_param(None) == {}

    def test_values_are_typed_when_json(self):
        param = _dimensions_param(["client=ANDROID", "build=311", "beta=true"])

        assert json.loads(param["dimensions"]) == [
            {"key": "client", "value": "ANDROID"},
            {"key": "build", "value": 311},
            {"key": "beta", "value": True},
        ]

    def test_value_may_contain_equals(self):
        param = _dimensions_param(["query=a=b"])

        assert json.loads(param["dimensions"]) == [{"key": "query", "value": "a=b"}]

    @pytest.mark.parametrize("item", ["client", "=ANDROID"])
    def test_malformed_item_reports_and_exits(self, item: str, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc_info:
            _dimensions_param([item])

        assert exc_info.value.code == 1
        assert "expected key=value" in capsys.readouterr().err


class TestEnvironment:
    def test_server_url_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("PULSE_SERVER", raising=False)

        assert get_server_url() == "http://localhost:8000"

    def test_token_header(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PULSE_TOKEN", "abc")

        assert _headers() == {"Authorization": "Bearer abc"}

    def test_no_token(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("PULSE_TOKEN", raising=False)

        assert _headers() == {}
