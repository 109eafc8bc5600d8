"""Tests for billboard_charts.core.exceptions."""

import pytest

from billboard_charts.core.exceptions import (
    BillboardChartsError,
    ChartError,
    ConfigError,
    ErrorKind,
    InvalidInputError,
    NetworkError,
    NotFoundError,
    ParsingError,
    RequestTimeoutError,
)

CHART_ERRORS = [
    (NetworkError, ErrorKind.NETWORK, "NETWORK_ERROR"),
    (RequestTimeoutError, ErrorKind.TIMEOUT, "TIMEOUT"),
    (ParsingError, ErrorKind.PARSE, "PARSE_ERROR"),
    (NotFoundError, ErrorKind.NOT_FOUND, "NOT_FOUND"),
    (InvalidInputError, ErrorKind.INVALID_INPUT, "INVALID_INPUT"),
]


class TestExceptionHierarchy:
    """Verify the exception class hierarchy."""

    def test_config_is_subclass(self):
        assert issubclass(ConfigError, BillboardChartsError)

    def test_config_is_not_a_chart_error(self):
        assert not issubclass(ConfigError, ChartError)

    @pytest.mark.parametrize("cls,_kind,_code", CHART_ERRORS)
    def test_chart_errors_share_base(self, cls, _kind, _code):
        assert issubclass(cls, ChartError)
        assert issubclass(cls, BillboardChartsError)

    def test_kinds_are_closed(self):
        assert {cls.kind for cls, _, _ in CHART_ERRORS} == set(ErrorKind)


class TestErrorKind:
    @pytest.mark.parametrize("cls,kind,code", CHART_ERRORS)
    def test_kind_and_code(self, cls, kind, code):
        exc = cls("boom")
        assert exc.kind is kind
        assert exc.code == code

    def test_kind_compares_as_string(self):
        assert ErrorKind.NOT_FOUND == "NOT_FOUND"


class TestExceptionContext:
    """Verify context dict and cause behavior."""

    def test_message(self):
        exc = NotFoundError("No songs found")
        assert str(exc) == "No songs found"

    def test_default_context_is_empty(self):
        assert NetworkError("x").context == {}

    def test_context_is_kept(self):
        exc = InvalidInputError("bad", context={"field": "date", "value": "2024-1-1"})
        assert exc.context["field"] == "date"
        assert exc.context["value"] == "2024-1-1"

    def test_cause_defaults_to_none(self):
        assert ParsingError("x").cause is None

    def test_cause_is_kept(self):
        underlying = ValueError("bad markup")
        exc = ParsingError("Failed to parse", cause=underlying)
        assert exc.cause is underlying

    def test_catch_by_base(self):
        with pytest.raises(ChartError):
            raise RequestTimeoutError("slow")

    def test_config_error_context(self):
        exc = ConfigError("missing", context={"field": "config_path"})
        assert exc.context == {"field": "config_path"}
